#!/usr/bin/env python
#
# onvifsoap - Copyright (C) onvifsoap contributors.
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
#


import unittest

from unittest import mock

import onvifsoap.const

from onvifsoap.const.xml import NS_SOAP12_ENV, NS_ONVIF_ERROR
from onvifsoap.error import OnvifSoapError
from onvifsoap.error import UnresolvedNamespacesError
from onvifsoap.model.fault import Fault
from onvifsoap.util.xml import Namespaces


ONVIF_NS = Namespaces({
    'soapenv': NS_SOAP12_ENV,
    'ter': NS_ONVIF_ERROR,
})


class TestFault(unittest.TestCase):
    def test_unauthorized(self):
        fault = Fault('soapenv:Sender', 'ter:NotAuthorized',
                                 'Sender not Authorized', namespaces=ONVIF_NS)

        assert fault.has_unauthorized_code()
        assert fault.is_unauthorized()

    def test_other_prefixes(self):
        ns = Namespaces({'s': NS_SOAP12_ENV, 'e': NS_ONVIF_ERROR})
        fault = Fault('s:Sender', 'e:NotAuthorized', 'Denied', namespaces=ns)

        assert fault.is_unauthorized()

    def test_receiver(self):
        fault = Fault('soapenv:Receiver', 'ter:NotAuthorized', 'Denied',
                                                          namespaces=ONVIF_NS)

        assert not fault.is_unauthorized()

    def test_other_subcode(self):
        fault = Fault('soapenv:Sender', 'ter:InvalidArgVal', 'Bad argument',
                                                          namespaces=ONVIF_NS)

        assert not fault.is_unauthorized()

    def test_unbound_prefix(self):
        ns = Namespaces({'soapenv': NS_SOAP12_ENV})
        fault = Fault('soapenv:Sender', 'ter:NotAuthorized', 'Denied',
                                                                namespaces=ns)

        assert not fault.has_unauthorized_code()

    def test_wrong_namespace(self):
        ns = Namespaces({'soapenv': NS_SOAP12_ENV, 'ter': 'urn:other'})
        fault = Fault('soapenv:Sender', 'ter:NotAuthorized', 'Denied',
                                                                namespaces=ns)

        assert not fault.is_unauthorized()

    def test_unprefixed_code(self):
        fault = Fault('Sender', 'NotAuthorized', 'Denied', namespaces=ONVIF_NS)

        assert not fault.has_unauthorized_code()

    def test_unresolved_namespaces(self):
        fault = Fault('soapenv:Sender', 'ter:NotAuthorized')

        self.assertRaises(UnresolvedNamespacesError, fault.is_unauthorized)

    def test_reason_fallback(self):
        fault = Fault('x:Whatever', '', ' Sender NOT authorized ',
                                                      namespaces=Namespaces())

        assert not fault.has_unauthorized_code()
        assert fault.has_unauthorized_reason()
        assert fault.is_unauthorized()

    def test_reason_fallback_disabled(self):
        fault = Fault('x:Whatever', '', 'Sender not authorized',
                                                      namespaces=Namespaces())

        with mock.patch.object(onvifsoap.const, 'MATCH_UNAUTHORIZED_REASON',
                                                                        False):
            assert not fault.is_unauthorized()

    def test_str(self):
        fault = Fault('soapenv:Receiver', 'ter:Action', 'Failed',
                                                          namespaces=ONVIF_NS)

        assert str(fault) == 'SOAP fault (soapenv:Receiver, ter:Action): Failed'
        assert str(Fault(reason='Failed')) == 'SOAP fault: Failed'

    def test_raisable(self):
        assert issubclass(Fault, OnvifSoapError)

        try:
            raise Fault('soapenv:Receiver', reason='Failed')
        except OnvifSoapError as e:
            assert e.reason == 'Failed'


if __name__ == '__main__':
    unittest.main()
