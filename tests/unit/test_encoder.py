from unittest import TestCase
from tokenledger.db.encoder import encode, decode, make_key
from tokenledger import config


class TestEncode(TestCase):
    def test_int_small_stays_plain(self):
        self.assertEqual(encode(1000), '1000')

    def test_int_above_mongo_range_tagged(self):
        self.assertEqual(encode(2 ** 64), '{"__big_int__":"18446744073709551616"}')

    def test_bool_not_treated_as_int(self):
        self.assertEqual(encode(True), 'true')

    def test_bytes_encoded_as_hex(self):
        self.assertEqual(encode(b'\x01\xff'), '{"__bytes__":"01ff"}')

    def test_nested_big_ints_in_list(self):
        e = encode({'a': [1, config.MAX_UINT256]})
        self.assertIn('__big_int__', e)


class TestDecode(TestCase):
    def test_decode_none_returns_none(self):
        self.assertIsNone(decode(None))

    def test_decode_invalid_returns_none(self):
        self.assertIsNone(decode(b'{not json'))

    def test_max_uint_survives(self):
        self.assertEqual(decode(encode(config.MAX_UINT256)), config.MAX_UINT256)

    def test_bytes_survive(self):
        self.assertEqual(decode(encode(b'hello')), b'hello')

    def test_decode_accepts_bytes(self):
        self.assertEqual(decode(b'"stu"'), 'stu')

    def test_plain_dict_stays_dict(self):
        self.assertEqual(decode(encode({'x': 1})), {'x': 1})


class TestMakeKey(TestCase):
    def test_variable_key(self):
        self.assertEqual(make_key('tau', 'total_supply'), 'tau.total_supply')

    def test_hash_key_with_args(self):
        self.assertEqual(make_key('tau', 'allowances', ['stu', 'raghu']), 'tau.allowances:stu:raghu')

    def test_int_args_stringified(self):
        self.assertEqual(make_key('nft', 'owners', [1]), 'nft.owners:1')
