# Copyright (C) 2012-2014 The python-txscript developers
#
# This file is part of python-txscript.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-txscript, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Addresses

Representing addresses and converting them to/from scriptPubKeys; there is no
actual wallet support implemented.
"""

import txscript.base58
import txscript.core.script as script


class CBitcoinAddressError(txscript.base58.Base58Error):
    """Raised when an invalid address is encountered"""

class CBitcoinAddress(txscript.base58.CBase58Data):
    """A pay-to-pubkey-hash address

    The 20-byte hash of a public key, plus the chain parameters the address
    belongs to. str() gives the base58check form.
    """
    def __new__(cls, s, params):
        self = super(CBitcoinAddress, cls).__new__(cls, s)
        if self.nVersion == params.BASE58_PREFIXES['SCRIPT_ADDR']:
            raise CBitcoinAddressError('%s: pay-to-script-hash addresses are not supported' % s)
        elif self.nVersion != params.BASE58_PREFIXES['PUBKEY_ADDR']:
            raise CBitcoinAddressError('Not a %s address: got nVersion=%d; expected nVersion=%d' % \
                                       (params.NAME, self.nVersion, params.BASE58_PREFIXES['PUBKEY_ADDR']))
        if len(self) != 20:
            raise CBitcoinAddressError('%s: expected a 20 byte hash, got %d bytes' % (s, len(self)))
        self.params = params
        return self

    def __init__(self, s, params):
        pass

    @classmethod
    def from_hash160(cls, hash160, params):
        """Create an address from a 20-byte public key hash"""
        if len(hash160) != 20:
            raise ValueError('hash160 must be exactly 20 bytes; got %d bytes' % len(hash160))
        self = cls.from_bytes(hash160, params.BASE58_PREFIXES['PUBKEY_ADDR'])
        self.params = params
        return self

    @classmethod
    def from_scriptPubKey(cls, scriptPubKey, params=None):
        """Convert a standard scriptPubKey to an address

        scriptPubKey may be a CScript, in which case its own params are used
        unless params is given, or raw bytes.
        """
        if not isinstance(scriptPubKey, script.CScript):
            scriptPubKey = script.CScript(scriptPubKey, params)
        if params is None:
            params = scriptPubKey.params
        if params is None:
            raise ValueError('CBitcoinAddress: no chain parameters given')
        return cls.from_hash160(scriptPubKey.extract_pubkey_hash(), params)

    def to_scriptPubKey(self):
        """Convert an address to a scriptPubKey"""
        return script.CScript(script.build_lock_script(self), self.params)

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, str(self), getattr(self, 'params', None))


__all__ = (
        'CBitcoinAddressError',
        'CBitcoinAddress',
)
