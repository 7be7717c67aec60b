#
#
#

import logging
from collections import defaultdict
from datetime import timedelta

from octodns.provider.base import BaseProvider
from octodns.record import Record as OctoRecord

from .exceptions import (
    InfobloxClientException,
    InfobloxClientNotFound,
    InfobloxClientUnauthorized,
    InfobloxConnectionError,
    InfobloxObjectManagerError,
    InfobloxQueryError,
    InfobloxRecordError,
)

__version__ = __VERSION__ = '0.1.0'

from .manager import InfobloxConfig, InfobloxRecordManager  # noqa: E402
from .records import APEX, Record  # noqa: E402

__all__ = [
    'InfobloxProvider',
    'InfobloxRecordManager',
    'InfobloxConfig',
    'Record',
    'InfobloxClientException',
    'InfobloxClientNotFound',
    'InfobloxClientUnauthorized',
    'InfobloxConnectionError',
    'InfobloxObjectManagerError',
    'InfobloxQueryError',
    'InfobloxRecordError',
]

# Used when the appliance record inherits its TTL from the zone
DEFAULT_TTL = 3600


class InfobloxProvider(BaseProvider):
    SUPPORTS_GEO = False
    SUPPORTS_DYNAMIC = False
    SUPPORTS_ROOT_NS = False
    SUPPORTS = set(('CNAME', 'TXT'))

    def __init__(
        self,
        id,
        host,
        version,
        username,
        password,
        view=None,
        on_error='abort',
        *args,
        **kwargs,
    ):
        self.log = logging.getLogger(f'InfobloxProvider[{id}]')
        self.log.debug(
            '__init__: id=%s, host=%s, version=%s, username=%s, '
            'password=***, view=%s, on_error=%s',
            id,
            host,
            version,
            username,
            view,
            on_error,
        )
        super().__init__(id, *args, **kwargs)

        self._records = InfobloxRecordManager(
            host,
            version,
            username,
            password,
            view=view,
            on_error=on_error,
            log=self.log,
        )

        # Cache structures
        self._zone_records = {}

    def _append_dot(self, value):
        if value[-1] == '.':
            return value
        return f'{value}.'

    def _record_ttl(self, record):
        seconds = int(record.ttl.total_seconds())
        return seconds or DEFAULT_TTL

    def _data_for_CNAME(self, _type, records):
        record = records[0]
        return {
            'ttl': self._record_ttl(record),
            'type': _type,
            'value': self._append_dot(record.data),
        }

    def _data_for_TXT(self, _type, records):
        values = [record.data.replace(';', '\\;') for record in records]
        return {
            'ttl': self._record_ttl(records[0]),
            'type': _type,
            'values': values,
        }

    def list_zones(self):
        self.log.debug('list_zones:')
        return sorted(f'{name}.' for name in self._records.list_zones())

    def zone_records(self, zone):
        if zone.name not in self._zone_records:
            self._zone_records[zone.name] = self._records.get_records(
                zone.name
            )

        return self._zone_records[zone.name]

    def populate(self, zone, target=False, lenient=False):
        self.log.debug(
            'populate: name=%s, target=%s, lenient=%s',
            zone.name,
            target,
            lenient,
        )

        values = defaultdict(lambda: defaultdict(list))
        records = self.zone_records(zone)
        for record in records:
            name = '' if record.name == APEX else record.name
            values[name][record.type].append(record)

        before = len(zone.records)
        for name, types in values.items():
            for _type, grouped in types.items():
                data_for = getattr(self, f'_data_for_{_type}')
                record = OctoRecord.new(
                    zone,
                    name,
                    data_for(_type, grouped),
                    source=self,
                    lenient=lenient,
                )
                zone.add_record(record, lenient=lenient)

        exists = bool(records)
        self.log.info(
            'populate:   found %s records, exists=%s',
            len(zone.records) - before,
            exists,
        )
        return exists

    def _records_for_CNAME(self, record):
        return [
            Record(
                type='CNAME',
                name=record.name or APEX,
                data=record.value.rstrip('.'),
                ttl=timedelta(seconds=record.ttl),
            )
        ]

    def _records_for_TXT(self, record):
        return [
            Record(
                type='TXT',
                name=record.name or APEX,
                data=value.replace('\\;', ';'),
                ttl=timedelta(seconds=record.ttl),
            )
            for value in record.values
        ]

    def _apply_Create(self, zone_name, change):
        new = change.new
        records_for = getattr(self, f'_records_for_{new._type}')
        self._records.append_records(zone_name, records_for(new))

    def _apply_Update(self, zone_name, change):
        new = change.new
        existing = change.existing
        if new._type == 'CNAME' and new.ttl == existing.ttl:
            # Only the target moved, update in place
            self._records.set_records(zone_name, self._records_for_CNAME(new))
            return
        # It's simpler to delete-then-recreate than to update
        self._apply_Delete(zone_name, change)
        self._apply_Create(zone_name, change)

    def _apply_Delete(self, zone_name, change):
        existing = change.existing
        records_for = getattr(self, f'_records_for_{existing._type}')
        self._records.delete_records(zone_name, records_for(existing))

    def _apply(self, plan):
        desired = plan.desired
        changes = plan.changes
        self.log.debug(
            '_apply: zone=%s, len(changes)=%d', desired.name, len(changes)
        )

        for change in changes:
            class_name = change.__class__.__name__
            getattr(self, f'_apply_{class_name}')(desired.name, change)

        # Clear out the cache if any
        self._zone_records.pop(desired.name, None)
