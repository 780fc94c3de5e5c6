# Copyright (C) 2012-2018 The python-txscript developers
#
# This file is part of python-txscript.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-txscript, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

# Note that setup.py can break if __init__.py imports any external
# dependencies, as these might not be installed when setup.py runs. In this
# case __version__ could be moved to a separate version.py and imported here.
__version__ = '0.1.0'


class ChainParams(object):
    """Parameters of a given chain that addresses depend on"""
    NAME = None
    COIN = None
    BASE58_PREFIXES = {}

    def __repr__(self):
        return '%s()' % self.__class__.__name__

class MainParams(ChainParams):
    NAME = 'mainnet'
    COIN = 'BTC'
    BASE58_PREFIXES = {'PUBKEY_ADDR':0,
                       'SCRIPT_ADDR':5}

class TestNetParams(ChainParams):
    NAME = 'testnet'
    COIN = 'BTC'
    BASE58_PREFIXES = {'PUBKEY_ADDR':111,
                       'SCRIPT_ADDR':196}

class RegTestParams(TestNetParams):
    NAME = 'regtest'

# DASH - https://github.com/dashpay/dash/blob/master/src/chainparams.cpp
class MainDashParams(MainParams):
    COIN = 'DASH'
    BASE58_PREFIXES = {'PUBKEY_ADDR':76,
                       'SCRIPT_ADDR':16}
class TestNetDashParams(TestNetParams):
    COIN = 'DASH'
    BASE58_PREFIXES = {'PUBKEY_ADDR':140,
                       'SCRIPT_ADDR':19}
class RegTestDashParams(TestNetDashParams):
    NAME = 'regtest'

# Litecoin - https://github.com/litecoin-project/litecoin/blob/master/src/chainparams.cpp
class MainLitecoinParams(MainParams):
    COIN = 'LTC'
    BASE58_PREFIXES = {'PUBKEY_ADDR':48,  # 0x30 - L addresses
                       'SCRIPT_ADDR':50}  # 0x32 - new M addresses
class TestNetLitecoinParams(TestNetParams):
    COIN = 'LTC'
    BASE58_PREFIXES = {'PUBKEY_ADDR':111,
                       'SCRIPT_ADDR': 58}
class RegTestLitecoinParams(TestNetLitecoinParams):
    NAME = 'regtest'

#
# See:
#   https://github.com/libbitcoin/libbitcoin-system/wiki/Altcoin-Version-Mappings
#
ClientParams = {}

ClientParams["BTC" ] = {}
ClientParams["BTC" ]["mainnet"] =    MainParams
ClientParams["BTC" ]["testnet"] = TestNetParams
ClientParams["BTC" ]["regtest"] = RegTestParams

ClientParams["DASH"] = {}
ClientParams["DASH"]["mainnet"] =    MainDashParams
ClientParams["DASH"]["testnet"] = TestNetDashParams
ClientParams["DASH"]["regtest"] = RegTestDashParams

ClientParams["LTC" ] = {}
ClientParams["LTC" ]["mainnet"] =    MainLitecoinParams
ClientParams["LTC" ]["testnet"] = TestNetLitecoinParams
ClientParams["LTC" ]["regtest"] = RegTestLitecoinParams


def get_params(name):
    """Look up the chain parameters to use

    name is one of 'mainnet', 'testnet', 'regtest', optionally followed by
    the coin, as in 'regtest-DASH'. The coin defaults to BTC.

    Nothing is selected globally; pass the result to CScript() or
    CBitcoinAddress() explicitly.
    """
    parts = name.split('-')
    if len(parts) == 1:
        network = parts[0]
        coin = "BTC"
    elif len(parts) == 2:
        network, coin = parts
    else:
        raise ValueError('Unknown chain %r' % name)

    try:
        return ClientParams[coin][network]()
    except KeyError:
        raise ValueError('Unknown chain %r and coin %r' % (network, coin))
