#
#
#

"""Typed CNAME and TXT operations on top of a Connector.

The object manager carries no default DNS view or network view; every call
names the view it works in.
"""

from .clients import Connector
from .exceptions import InfobloxClientNotFound
from .records import CNAMERecord, TXTRecord


class ObjectManager(object):
    CNAME = 'record:cname'
    TXT = 'record:txt'

    def __init__(
        self, connector: Connector, dns_view: str = '', network_view: str = ''
    ):
        self.connector = connector
        self.dns_view = dns_view
        self.network_view = network_view

    def _payload(self, use_ttl, ttl, comment, extattrs, **fields):
        fields['use_ttl'] = use_ttl
        fields['ttl'] = ttl
        fields['comment'] = comment or ''
        if extattrs:
            fields['extattrs'] = extattrs
        return fields

    def _first(self, object_type, params, return_fields, what):
        found = self.connector.query(object_type, params, return_fields)
        if not found:
            raise InfobloxClientNotFound(what)
        return found[0]

    # --- CNAME -------------------------------------------------------------

    def create_cname_record(
        self, view, canonical, name, use_ttl, ttl, comment, extattrs
    ):
        data = self._payload(
            use_ttl,
            ttl,
            comment,
            extattrs,
            view=view,
            name=name,
            canonical=canonical,
        )
        return CNAMERecord.from_wapi(
            self.connector.create(self.CNAME, data, CNAMERecord.RETURN_FIELDS)
        )

    def get_cname_record(self, view, canonical, name):
        if not canonical and not name:
            raise ValueError('canonical name or record name is required')
        params = {'view': view}
        if canonical:
            params['canonical'] = canonical
        if name:
            params['name'] = name
        return CNAMERecord.from_wapi(
            self._first(
                self.CNAME,
                params,
                CNAMERecord.RETURN_FIELDS,
                f'CNAME record {name or canonical} in view {view}',
            )
        )

    def update_cname_record(
        self, ref, canonical, name, use_ttl, ttl, comment, extattrs
    ):
        data = self._payload(
            use_ttl, ttl, comment, extattrs, name=name, canonical=canonical
        )
        return CNAMERecord.from_wapi(
            self.connector.update(ref, data, CNAMERecord.RETURN_FIELDS)
        )

    def delete_cname_record(self, ref):
        return self.connector.delete(ref)

    # --- TXT ---------------------------------------------------------------

    def create_txt_record(
        self, view, name, text, ttl, use_ttl, comment, extattrs
    ):
        data = self._payload(
            use_ttl, ttl, comment, extattrs, view=view, name=name, text=text
        )
        return TXTRecord.from_wapi(
            self.connector.create(self.TXT, data, TXTRecord.RETURN_FIELDS)
        )

    def get_txt_record(self, view, name):
        if not name:
            raise ValueError('record name is required')
        return TXTRecord.from_wapi(
            self._first(
                self.TXT,
                {'view': view, 'name': name},
                TXTRecord.RETURN_FIELDS,
                f'TXT record {name} in view {view}',
            )
        )

    def update_txt_record(
        self, ref, name, text, ttl, use_ttl, comment, extattrs
    ):
        data = self._payload(
            use_ttl, ttl, comment, extattrs, name=name, text=text
        )
        return TXTRecord.from_wapi(
            self.connector.update(ref, data, TXTRecord.RETURN_FIELDS)
        )

    def delete_txt_record(self, ref):
        return self.connector.delete(ref)

    def close(self):
        self.connector.close()
