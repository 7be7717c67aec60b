#
#
#

import logging
import warnings

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InsecureRequestWarning
from urllib3.util.retry import Retry

from octodns import __VERSION__ as octodns_version

from . import __version__ as package_version
from .exceptions import (
    InfobloxClientException,
    InfobloxClientNotFound,
    InfobloxClientUnauthorized,
)


class InfobloxClient(object):
    '''Connection handle for the Infoblox WAPI.

    Transport tuning is fixed: HTTPS on port 443, certificate verification
    disabled, 20 second request timeout, 10 pooled connections.
    '''

    SCHEME = 'https'
    PORT = 443
    TIMEOUT = 20
    POOL_CONNECTIONS = 10
    PAGE_SIZE = 1000

    def __init__(self, host, version, username, password):
        if not host:
            raise ValueError('host is required')
        if not version:
            raise ValueError('version is required')
        if not username:
            raise ValueError('username is required')

        self.log = logging.getLogger(f'InfobloxClient[{host}]')
        self.base_url = (
            f'{self.SCHEME}://{host}:{self.PORT}/wapi/v{version.lstrip("v")}'
        )

        session = Session()
        session.auth = (username, password)
        session.verify = False
        session.headers.update(
            {
                'Accept': 'application/json',
                'User-Agent': f'octodns/{octodns_version} octodns-infoblox/{package_version}',
            }
        )
        # Creates are not idempotent, so POST is never retried
        retry = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist={502, 503, 504},
            allowed_methods={'GET', 'PUT', 'DELETE'},
        )
        adapter = HTTPAdapter(
            pool_connections=self.POOL_CONNECTIONS,
            pool_maxsize=self.POOL_CONNECTIONS,
            max_retries=retry,
        )
        session.mount(f'{self.SCHEME}://', adapter)
        self._session = session

    def _do(self, method, path, params=None, data=None):
        url = f'{self.base_url}/{path}'
        # Certificates are not verified; silence urllib3 for this call only
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', InsecureRequestWarning)
            response = self._session.request(
                method, url, params=params, json=data, timeout=self.TIMEOUT
            )
        if response.status_code == 401:
            raise InfobloxClientUnauthorized()
        if response.status_code == 404:
            raise InfobloxClientNotFound(path)
        if response.status_code >= 400:
            try:
                text = response.json().get('text')
            except ValueError:
                text = None
            raise InfobloxClientException(
                f'{method} {path}: {response.status_code} '
                f'{text or response.reason}'
            )
        return response

    def _do_json(self, method, path, params=None, data=None):
        return self._do(method, path, params, data).json()

    def _return_fields(self, return_fields):
        if not return_fields:
            return {}
        return {'_return_fields': ','.join(return_fields)}

    def query(self, object_type, params, return_fields=None):
        base = dict(params)
        base.update(self._return_fields(return_fields))
        base.update(
            {
                '_paging': 1,
                '_return_as_object': 1,
                '_max_results': self.PAGE_SIZE,
            }
        )

        ret = []
        page_params = base
        while True:
            data = self._do_json('GET', object_type, page_params)
            ret += data.get('result', [])

            next_page_id = data.get('next_page_id')
            if not next_page_id:
                break

            page_params = dict(base, _page_id=next_page_id)

        self.log.debug(
            'query: object_type=%s, params=%s, found=%d',
            object_type,
            params,
            len(ret),
        )
        return ret

    def get(self, ref, return_fields=None):
        return self._do_json('GET', ref, self._return_fields(return_fields))

    def create(self, object_type, data, return_fields=None):
        ref = self._do_json('POST', object_type, data=data)
        self.log.debug('create: object_type=%s, ref=%s', object_type, ref)
        return self.get(ref, return_fields)

    def update(self, ref, data, return_fields=None):
        new_ref = self._do_json('PUT', ref, data=data)
        self.log.debug('update: ref=%s, new_ref=%s', ref, new_ref)
        return self.get(new_ref, return_fields)

    def delete(self, ref):
        return self._do_json('DELETE', ref)

    def zones(self, view):
        zones = self.query('zone_auth', {'view': view}, ('fqdn',))
        return [z['fqdn'] for z in zones if z.get('fqdn')]

    def close(self):
        self._session.close()
