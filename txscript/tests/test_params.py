# Copyright (C) 2013-2014 The python-txscript developers
#
# This file is part of python-txscript.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-txscript, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

import unittest

import txscript

class Test_params(unittest.TestCase):
    def test_get_params(self):
        def T(name, expected_class, expected_name, expected_coin):
            params = txscript.get_params(name)
            self.assertIsInstance(params, expected_class)
            self.assertEqual(params.NAME, expected_name)
            self.assertEqual(params.COIN, expected_coin)

        T('mainnet', txscript.MainParams, 'mainnet', 'BTC')
        T('testnet', txscript.TestNetParams, 'testnet', 'BTC')
        T('regtest', txscript.RegTestParams, 'regtest', 'BTC')
        T('mainnet-BTC', txscript.MainParams, 'mainnet', 'BTC')
        T('regtest-DASH', txscript.RegTestDashParams, 'regtest', 'DASH')
        T('mainnet-LTC', txscript.MainLitecoinParams, 'mainnet', 'LTC')

    def test_prefixes(self):
        self.assertEqual(txscript.get_params('mainnet').BASE58_PREFIXES['PUBKEY_ADDR'], 0)
        self.assertEqual(txscript.get_params('testnet').BASE58_PREFIXES['PUBKEY_ADDR'], 111)
        self.assertEqual(txscript.get_params('mainnet-DASH').BASE58_PREFIXES['PUBKEY_ADDR'], 76)
        self.assertEqual(txscript.get_params('mainnet-LTC').BASE58_PREFIXES['PUBKEY_ADDR'], 48)

    def test_no_global_state(self):
        self.assertIsNot(txscript.get_params('mainnet'), txscript.get_params('mainnet'))
        txscript.get_params('testnet')
        self.assertFalse(hasattr(txscript, 'params'))

    def test_unknown(self):
        for name in ('', 'mainnet-DOGE', 'signet', 'main-net-BTC'):
            with self.assertRaises(ValueError):
                txscript.get_params(name)
