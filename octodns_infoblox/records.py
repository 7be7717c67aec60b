#
#
#

"""Record shapes and the translation between them.

Two families of records meet here:

- ``Record`` is the generic, zone-relative record exchanged with callers.
- ``CNAMERecord`` and ``TXTRecord`` mirror the appliance's ``record:cname``
  and ``record:txt`` objects, whose names are always zone-qualified.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, NewType, Optional

from .exceptions import InfobloxClientException

# Appliance-assigned object reference; only ever round-tripped.
Ref = NewType('Ref', str)

SUPPORTED_TYPES = ('CNAME', 'TXT')

APEX = '@'


@dataclass(frozen=True)
class Record:
    type: str
    name: str
    data: str
    ttl: timedelta = timedelta(0)


def _required(data, key):
    try:
        return data[key]
    except KeyError:
        raise InfobloxClientException(
            f'malformed WAPI object, missing {key}: {data!r}'
        ) from None


@dataclass
class CNAMERecord:
    ref: Optional[Ref]
    name: str
    canonical: str
    ttl: int = 0
    use_ttl: bool = False
    comment: str = ''
    extattrs: Dict = field(default_factory=dict)
    view: Optional[str] = None

    RETURN_FIELDS = (
        'name',
        'canonical',
        'ttl',
        'use_ttl',
        'comment',
        'extattrs',
        'view',
        'zone',
    )

    @classmethod
    def from_wapi(cls, data):
        return cls(
            ref=Ref(_required(data, '_ref')),
            name=_required(data, 'name'),
            canonical=data.get('canonical', ''),
            ttl=data.get('ttl') or 0,
            use_ttl=bool(data.get('use_ttl', False)),
            comment=data.get('comment') or '',
            extattrs=data.get('extattrs') or {},
            view=data.get('view'),
        )


@dataclass
class TXTRecord:
    ref: Optional[Ref]
    name: str
    text: str
    ttl: int = 0
    use_ttl: bool = False
    comment: str = ''
    extattrs: Dict = field(default_factory=dict)
    view: Optional[str] = None

    RETURN_FIELDS = (
        'name',
        'text',
        'ttl',
        'use_ttl',
        'comment',
        'extattrs',
        'view',
        'zone',
    )

    @classmethod
    def from_wapi(cls, data):
        return cls(
            ref=Ref(_required(data, '_ref')),
            name=_required(data, 'name'),
            text=data.get('text', ''),
            ttl=data.get('ttl') or 0,
            use_ttl=bool(data.get('use_ttl', False)),
            comment=data.get('comment') or '',
            extattrs=data.get('extattrs') or {},
            view=data.get('view'),
        )


# --- Name normalization ----------------------------------------------------


def trim_zone(zone: str) -> str:
    if zone.endswith('.'):
        return zone[:-1]
    return zone


def relative_name(fq_name: str, zone: str) -> str:
    '''Strip the zone suffix; the zone name itself becomes '@'.'''
    zone = trim_zone(zone)
    if fq_name == zone:
        return APEX
    suffix = f'.{zone}'
    if fq_name.endswith(suffix):
        return fq_name[: -len(suffix)]
    return fq_name


def qualified_name(name: str, zone: str) -> str:
    zone = trim_zone(zone)
    if name in ('', APEX):
        return zone
    return f'{name}.{zone}'


# --- Translation -----------------------------------------------------------


def _ttl_for(appliance_record):
    if appliance_record.use_ttl:
        return timedelta(seconds=appliance_record.ttl)
    return timedelta(0)


def _seconds(ttl: timedelta) -> int:
    return int(ttl.total_seconds())


def record_from_cname(cname: CNAMERecord, zone: str) -> Record:
    return Record(
        type='CNAME',
        name=relative_name(cname.name, zone),
        data=cname.canonical,
        ttl=_ttl_for(cname),
    )


def record_from_txt(txt: TXTRecord, zone: str) -> Record:
    return Record(
        type='TXT',
        name=relative_name(txt.name, zone),
        data=txt.text,
        ttl=_ttl_for(txt),
    )


def cname_create_args(record: Record, zone: str, view: str) -> Dict:
    return {
        'view': view,
        'canonical': record.data,
        'name': qualified_name(record.name, zone),
        'use_ttl': True,
        'ttl': _seconds(record.ttl),
        'comment': '',
        'extattrs': None,
    }


def txt_create_args(record: Record, zone: str, view: str) -> Dict:
    return {
        'view': view,
        'name': qualified_name(record.name, zone),
        'text': record.data,
        'ttl': _seconds(record.ttl),
        'use_ttl': True,
        'comment': '',
        'extattrs': None,
    }
