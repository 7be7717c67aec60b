#
# Tests for name normalization and record translation
#

from datetime import timedelta
from unittest import TestCase

from octodns_infoblox.exceptions import InfobloxClientException
from octodns_infoblox.records import (
    CNAMERecord,
    Record,
    TXTRecord,
    cname_create_args,
    qualified_name,
    record_from_cname,
    record_from_txt,
    relative_name,
    trim_zone,
    txt_create_args,
)


class TestNames(TestCase):
    def test_trim_zone_strips_one_dot(self):
        self.assertEqual('example.com', trim_zone('example.com.'))
        self.assertEqual('example.com', trim_zone('example.com'))
        self.assertEqual('example.com.', trim_zone('example.com..'))

    def test_relative_name(self):
        self.assertEqual('www', relative_name('www.example.com', 'example.com'))
        self.assertEqual(
            'a.b', relative_name('a.b.example.com', 'example.com.')
        )
        # Not under the zone, left alone
        self.assertEqual(
            'www.other.org', relative_name('www.other.org', 'example.com')
        )
        # Suffix must match on a label boundary
        self.assertEqual(
            'notexample.com', relative_name('notexample.com', 'example.com')
        )
        self.assertEqual('@', relative_name('example.com', 'example.com.'))

    def test_qualified_name(self):
        self.assertEqual(
            '_acme.example.com', qualified_name('_acme', 'example.com.')
        )
        self.assertEqual('www.example.com', qualified_name('www', 'example.com'))
        self.assertEqual('example.com', qualified_name('@', 'example.com.'))
        self.assertEqual('example.com', qualified_name('', 'example.com'))

    def test_round_trip(self):
        for zone in ('example.com', 'example.com.', 'sub.unit.tests.'):
            for name in ('www', '_acme-challenge', 'a.b.c', '@', '*'):
                self.assertEqual(
                    name, relative_name(qualified_name(name, zone), zone)
                )


class TestTranslation(TestCase):
    def test_cname_to_record(self):
        cname = CNAMERecord(
            ref='record:cname/ZG5z:www.example.com/default',
            name='www.example.com',
            canonical='target.example.com',
            ttl=300,
            use_ttl=True,
        )
        self.assertEqual(
            Record(
                'CNAME', 'www', 'target.example.com', timedelta(seconds=300)
            ),
            record_from_cname(cname, 'example.com.'),
        )

    def test_txt_to_record_without_use_ttl(self):
        txt = TXTRecord(
            ref='record:txt/ZG5z:_acme.example.com/default',
            name='_acme.example.com',
            text='abc123',
            ttl=7200,
            use_ttl=False,
        )
        self.assertEqual(
            Record('TXT', '_acme', 'abc123'),
            record_from_txt(txt, 'example.com'),
        )

    def test_cname_create_args(self):
        record = Record(
            'CNAME', 'www', 'target.example.com', timedelta(minutes=5)
        )
        self.assertEqual(
            {
                'view': 'internal',
                'canonical': 'target.example.com',
                'name': 'www.example.com',
                'use_ttl': True,
                'ttl': 300,
                'comment': '',
                'extattrs': None,
            },
            cname_create_args(record, 'example.com.', 'internal'),
        )

    def test_txt_create_args(self):
        record = Record('TXT', '_acme', 'abc123', timedelta(seconds=300))
        self.assertEqual(
            {
                'view': 'default',
                'name': '_acme.example.com',
                'text': 'abc123',
                'ttl': 300,
                'use_ttl': True,
                'comment': '',
                'extattrs': None,
            },
            txt_create_args(record, 'example.com', 'default'),
        )

    def test_from_wapi_defaults(self):
        cname = CNAMERecord.from_wapi(
            {
                '_ref': 'record:cname/ZG5z:www.example.com/default',
                'name': 'www.example.com',
                'canonical': 'target.example.com',
            }
        )
        self.assertEqual('record:cname/ZG5z:www.example.com/default', cname.ref)
        self.assertEqual(0, cname.ttl)
        self.assertFalse(cname.use_ttl)
        self.assertEqual('', cname.comment)
        self.assertEqual({}, cname.extattrs)

        txt = TXTRecord.from_wapi(
            {
                '_ref': 'record:txt/ZG5z:t.example.com/default',
                'name': 't.example.com',
                'text': 'hello',
                'ttl': 60,
                'use_ttl': True,
                'comment': 'acme',
                'extattrs': {'Owner': {'value': 'ops'}},
                'view': 'default',
            }
        )
        self.assertEqual('hello', txt.text)
        self.assertEqual(60, txt.ttl)
        self.assertTrue(txt.use_ttl)
        self.assertEqual('acme', txt.comment)
        self.assertEqual({'Owner': {'value': 'ops'}}, txt.extattrs)
        self.assertEqual('default', txt.view)

    def test_from_wapi_missing_keys(self):
        with self.assertRaises(InfobloxClientException) as ctx:
            CNAMERecord.from_wapi({'name': 'www.example.com'})
        self.assertIn('missing _ref', str(ctx.exception))
        with self.assertRaises(InfobloxClientException) as ctx:
            TXTRecord.from_wapi({'_ref': 'record:txt/ZG5z'})
        self.assertIn('missing name', str(ctx.exception))
