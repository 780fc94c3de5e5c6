# Copyright (C) 2013-2015 The python-txscript developers
#
# This file is part of python-txscript.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-txscript, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

import hashlib
import unittest

import txscript
from txscript.base58 import Base58ChecksumError
from txscript.core import Hash160, b2x, x
from txscript.core.script import CScript, UnexpectedShapeError, build_unlock_script
from txscript.wallet import *

def _have_ripemd160():
    try:
        hashlib.new('ripemd160')
    except ValueError:
        return False
    return True


class Test_CBitcoinAddress(unittest.TestCase):
    def test_create_from_string(self):
        """Create CBitcoinAddress's from strings"""

        def T(str_addr, params, expected_bytes, expected_nVersion):
            addr = CBitcoinAddress(str_addr, params)
            self.assertEqual(addr.to_bytes(), expected_bytes)
            self.assertEqual(addr.nVersion, expected_nVersion)
            self.assertIs(addr.params, params)
            self.assertEqual(str(addr), str_addr)

        T('1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa', txscript.MainParams(),
          x('62e907b15cbf27d5425399ebf6f0fb50ebb88f18'), 0)
        T('1111111111111111111114oLvT2', txscript.MainParams(),
          b'\x00'*20, 0)

    def test_from_hash160(self):
        def T(hash160, params, expected_str_address):
            addr = CBitcoinAddress.from_hash160(x(hash160), params)
            self.assertEqual(str(addr), expected_str_address)
            self.assertEqual(addr.nVersion, params.BASE58_PREFIXES['PUBKEY_ADDR'])

        T('62e907b15cbf27d5425399ebf6f0fb50ebb88f18', txscript.get_params('mainnet'),
          '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa')
        T('0000000000000000000000000000000000000000', txscript.get_params('mainnet'),
          '1111111111111111111114oLvT2')

        addr = CBitcoinAddress.from_hash160(b'\x11'*20, txscript.get_params('testnet'))
        self.assertEqual(addr.nVersion, 111)
        self.assertEqual(CBitcoinAddress(str(addr), txscript.get_params('testnet')), addr)

        with self.assertRaises(ValueError):
            CBitcoinAddress.from_hash160(b'\x11'*19, txscript.get_params('mainnet'))

    def test_wrong_nVersion(self):
        """Creating a CBitcoinAddress for the wrong chain fails"""
        mainnet = txscript.get_params('mainnet')

        with self.assertRaises(CBitcoinAddressError):
            CBitcoinAddress('mpXwg4jMtRhuSpVq4xS3HFHmCmWp9NyGKt', mainnet)

        # pay-to-script-hash
        with self.assertRaises(CBitcoinAddressError):
            CBitcoinAddress('37k7toV1Nv4DfmQbmZ8KuZDQCYK9x5KpzP', mainnet)

        with self.assertRaises(CBitcoinAddressError):
            CBitcoinAddress('2MyJKxYR2zNZZsZ39SgkCXWCfQtXKhnWSWq', txscript.get_params('testnet'))

        addr = CBitcoinAddress('mpXwg4jMtRhuSpVq4xS3HFHmCmWp9NyGKt', txscript.get_params('testnet'))
        self.assertEqual(addr.nVersion, 111)

    def test_bad_checksum(self):
        with self.assertRaises(Base58ChecksumError):
            CBitcoinAddress('1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNb', txscript.get_params('mainnet'))

    def test_from_scriptPubKey(self):
        mainnet = txscript.get_params('mainnet')

        def T(hex_scriptpubkey, expected_str_address):
            addr = CBitcoinAddress.from_scriptPubKey(x(hex_scriptpubkey), mainnet)
            self.assertEqual(str(addr), expected_str_address)

            addr = CBitcoinAddress.from_scriptPubKey(CScript(x(hex_scriptpubkey), mainnet))
            self.assertEqual(str(addr), expected_str_address)

        T('76a914000000000000000000000000000000000000000088ac', '1111111111111111111114oLvT2')
        T('76a91462e907b15cbf27d5425399ebf6f0fb50ebb88f1888ac', '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa')

    def test_from_nonstd_scriptPubKey(self):
        with self.assertRaises(UnexpectedShapeError):
            CBitcoinAddress.from_scriptPubKey(x('a914000000000000000000000000000000000000000087'),
                                              txscript.get_params('mainnet'))

        with self.assertRaises(ValueError):
            CBitcoinAddress.from_scriptPubKey(x('76a914000000000000000000000000000000000000000088ac'))

    def test_to_scriptPubKey(self):
        params = txscript.get_params('testnet')
        addr = CBitcoinAddress.from_hash160(b'\x11'*20, params)
        script = addr.to_scriptPubKey()
        self.assertIsInstance(script, CScript)
        self.assertIs(script.params, params)
        self.assertEqual(b2x(script), '76a914' + '11'*20 + '88ac')
        self.assertEqual(script.get_destination_address(), addr)

    def test_repr(self):
        addr = CBitcoinAddress.from_hash160(b'\x00'*20, txscript.MainParams())
        self.assertEqual(repr(addr), "CBitcoinAddress('1111111111111111111114oLvT2', MainParams())")


@unittest.skipUnless(_have_ripemd160(), 'hashlib has no ripemd160')
class Test_source_address(unittest.TestCase):
    def test_genesis_pubkey(self):
        pubkey = x('04678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f61deb649f6bc3f4cef38c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5f')
        self.assertEqual(b2x(Hash160(pubkey)), '62e907b15cbf27d5425399ebf6f0fb50ebb88f18')

        mainnet = txscript.get_params('mainnet')
        script = CScript(build_unlock_script(b'\x30' * 71, pubkey), mainnet)
        self.assertEqual(str(script.get_source_address()), '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa')

        script = CScript(b'\x41' + pubkey, mainnet)
        self.assertEqual(str(script.get_source_address()), '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa')
