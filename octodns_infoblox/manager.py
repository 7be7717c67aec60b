#
#
#

import logging
from contextlib import closing
from dataclasses import dataclass

from requests import RequestException

from .exceptions import (
    InfobloxClientException,
    InfobloxClientNotFound,
    InfobloxConnectionError,
    InfobloxObjectManagerError,
    InfobloxQueryError,
    InfobloxRecordError,
)
from .object_manager import ObjectManager
from .records import (
    SUPPORTED_TYPES,
    CNAMERecord,
    TXTRecord,
    cname_create_args,
    qualified_name,
    record_from_cname,
    record_from_txt,
    trim_zone,
    txt_create_args,
)
from .strategies import STRATEGIES

DEFAULT_VIEW = 'default'

# Failures of a single appliance call; anything else propagates untouched
RECORD_ERRORS = (InfobloxClientException, RequestException, ValueError)


@dataclass(frozen=True)
class InfobloxConfig:
    host: str
    version: str
    username: str
    password: str
    view: str = DEFAULT_VIEW


class InfobloxRecordManager(object):
    '''List, append, set and delete CNAME and TXT records in a zone.

    Names exchanged with callers are zone-relative. A fresh connection is
    opened for every call and closed when it returns.

    on_error picks what happens when a single record fails: 'abort' raises
    InfobloxRecordError with the records completed so far, 'continue' (or
    'skip') logs the failure and moves on.
    '''

    def __init__(
        self,
        host,
        version,
        username,
        password,
        view=None,
        on_error='abort',
        log=None,
        connector_factory=None,
    ):
        self.log = log or logging.getLogger(f'InfobloxRecordManager[{host}]')
        self.config = InfobloxConfig(
            host=host,
            version=version,
            username=username,
            password=password,
            view=view or DEFAULT_VIEW,
        )
        self.log.debug(
            '__init__: host=%s, version=%s, username=%s, password=***, '
            'view=%s, on_error=%s',
            host,
            version,
            username,
            self.config.view,
            on_error,
        )
        self._strategy = self._create_strategy(on_error)
        if connector_factory is None:
            from .wapi_client import InfobloxClient

            connector_factory = InfobloxClient
        self._connector_factory = connector_factory

    def _create_strategy(self, on_error):
        try:
            return STRATEGIES[on_error]()
        except KeyError:
            raise ValueError(
                f"Invalid on_error '{on_error}'. Must be one of "
                f"{', '.join(sorted(STRATEGIES))}"
            ) from None

    @property
    def view(self):
        return self.config.view

    # --- Connections ---------------------------------------------------------

    def _create_client(self):
        self.log.debug(
            '_create_client: host=%s, version=%s',
            self.config.host,
            self.config.version,
        )
        try:
            return self._connector_factory(
                host=self.config.host,
                version=self.config.version,
                username=self.config.username,
                password=self.config.password,
            )
        except (ValueError, RequestException) as e:
            self.log.error('_create_client: failed to create connector: %s', e)
            raise InfobloxConnectionError(
                f'failed to create connector: {e}'
            ) from e

    def _object_manager(self):
        try:
            client = self._create_client()
        except InfobloxConnectionError as e:
            raise InfobloxObjectManagerError(
                f'failed to get object manager: {e.__cause__}'
            ) from e.__cause__
        return ObjectManager(client, dns_view='', network_view='')

    # --- Per record handlers ---------------------------------------------------

    def _append_CNAME(self, objects, zone, record):
        created = objects.create_cname_record(
            **cname_create_args(record, zone, self.view)
        )
        return record_from_cname(created, zone)

    def _append_TXT(self, objects, zone, record):
        created = objects.create_txt_record(
            **txt_create_args(record, zone, self.view)
        )
        return record_from_txt(created, zone)

    def _set_CNAME(self, objects, zone, record):
        name = qualified_name(record.name, zone)
        try:
            existing = objects.get_cname_record(self.view, '', name)
        except InfobloxClientNotFound:
            self.log.debug('_set_CNAME: %s not found, creating', name)
            return self._append_CNAME(objects, zone, record)

        # New target, existing TTL metadata
        updated = objects.update_cname_record(
            existing.ref,
            record.data,
            existing.name,
            existing.use_ttl,
            existing.ttl,
            existing.comment,
            existing.extattrs,
        )
        return record_from_cname(updated, zone)

    def _set_TXT(self, objects, zone, record):
        name = qualified_name(record.name, zone)
        try:
            existing = objects.get_txt_record(self.view, name)
        except InfobloxClientNotFound:
            self.log.debug('_set_TXT: %s not found, creating', name)
            return self._append_TXT(objects, zone, record)

        updated = objects.update_txt_record(
            existing.ref,
            existing.name,
            record.data,
            existing.ttl,
            existing.use_ttl,
            existing.comment,
            existing.extattrs,
        )
        return record_from_txt(updated, zone)

    def _delete_CNAME(self, objects, zone, record):
        existing = objects.get_cname_record(
            self.view, '', qualified_name(record.name, zone)
        )
        objects.delete_cname_record(existing.ref)
        return record_from_cname(existing, zone)

    def _delete_TXT(self, objects, zone, record):
        existing = objects.get_txt_record(
            self.view, qualified_name(record.name, zone)
        )
        objects.delete_txt_record(existing.ref)
        return record_from_txt(existing, zone)

    def _process(self, action, zone, records):
        done = []
        with closing(self._object_manager()) as objects:
            for record in records:
                if record.type not in SUPPORTED_TYPES:
                    self.log.debug(
                        '%s: skipping unsupported %s record %s',
                        action,
                        record.type,
                        record.name,
                    )
                    continue
                self.log.debug(
                    '%s: %s record name=%s, data=%s, ttl=%s',
                    action,
                    record.type,
                    record.name,
                    record.data,
                    record.ttl,
                )
                handler = getattr(self, f'_{action}_{record.type}')
                try:
                    result = handler(objects, zone, record)
                except RECORD_ERRORS as e:
                    error = InfobloxRecordError(action, record, e)
                    error.__cause__ = e
                    self._strategy.record_failed(self.log, error, done)
                    continue
                done.append(result)
        return done

    # --- Operations ------------------------------------------------------------

    def get_records(self, zone):
        '''All CNAME records then all TXT records in the zone.'''
        self.log.info('get_records: zone=%s, view=%s', zone, self.view)
        params = {'zone': trim_zone(zone), 'view': self.view}

        with closing(self._create_client()) as client:
            try:
                cnames = client.query(
                    ObjectManager.CNAME, params, CNAMERecord.RETURN_FIELDS
                )
            except RECORD_ERRORS as e:
                self.log.error('get_records: failed to get CNAME records: %s', e)
                raise InfobloxQueryError(
                    f'failed to get CNAME records: {e}'
                ) from e
            try:
                txts = client.query(
                    ObjectManager.TXT, params, TXTRecord.RETURN_FIELDS
                )
            except RECORD_ERRORS as e:
                self.log.error('get_records: failed to get TXT records: %s', e)
                raise InfobloxQueryError(
                    f'failed to get TXT records: {e}'
                ) from e

        try:
            records = [
                record_from_cname(CNAMERecord.from_wapi(c), zone)
                for c in cnames
            ]
            records += [
                record_from_txt(TXTRecord.from_wapi(t), zone) for t in txts
            ]
        except InfobloxClientException as e:
            self.log.error('get_records: %s', e)
            raise InfobloxQueryError(f'failed to read records: {e}') from e

        self.log.info(
            'get_records: zone=%s, found %d records', zone, len(records)
        )
        return records

    def append_records(self, zone, records):
        '''Create every record; returns the records that were added.'''
        self.log.info(
            'append_records: zone=%s, count=%d', zone, len(records)
        )
        added = self._process('append', zone, records)
        self.log.info('append_records: zone=%s, added=%d', zone, len(added))
        return added

    def set_records(self, zone, records):
        '''Update records that exist by name, create the rest.'''
        self.log.info('set_records: zone=%s, count=%d', zone, len(records))
        updated = self._process('set', zone, records)
        self.log.info('set_records: zone=%s, set=%d', zone, len(updated))
        return updated

    def delete_records(self, zone, records):
        '''Delete records by name; returns them as they were beforehand.'''
        self.log.info(
            'delete_records: zone=%s, count=%d', zone, len(records)
        )
        deleted = self._process('delete', zone, records)
        self.log.info(
            'delete_records: zone=%s, deleted=%d', zone, len(deleted)
        )
        return deleted

    def list_zones(self):
        with closing(self._create_client()) as client:
            try:
                return client.zones(self.view)
            except RECORD_ERRORS as e:
                raise InfobloxQueryError(f'failed to list zones: {e}') from e
