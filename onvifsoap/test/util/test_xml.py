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

from lxml import etree

from onvifsoap.util.xml import Namespaces
from onvifsoap.util.xml import ns_declarations
from onvifsoap.util.xml import payload_wrapper


class TestNamespaces(unittest.TestCase):
    def setUp(self):
        self.ns = Namespaces({
            'env': 'http://www.w3.org/2003/05/soap-envelope',
            'ter': 'http://www.onvif.org/ver10/error',
        })

    def test_resolve(self):
        assert self.ns.resolve('ter:NotAuthorized') == \
                        ('http://www.onvif.org/ver10/error', 'NotAuthorized')
        assert self.ns.resolve(' env:Sender\n') == \
                        ('http://www.w3.org/2003/05/soap-envelope', 'Sender')

    def test_resolve_unbound(self):
        assert self.ns.resolve('tt:NotAuthorized') is None

    def test_resolve_unprefixed(self):
        assert self.ns.resolve('NotAuthorized') is None
        assert self.ns.resolve('ter:') is None
        assert self.ns.resolve('') is None
        assert self.ns.resolve(None) is None

    def test_get_prefix(self):
        assert self.ns.get_prefix('http://www.onvif.org/ver10/error') == 'ter'
        assert self.ns.get_prefix('urn:nothing') is None

    def test_qualify(self):
        assert self.ns.qualify('http://www.onvif.org/ver10/error',
                                      'NotAuthorized') == 'ter:NotAuthorized'
        assert self.ns.qualify('urn:nothing', 'a') is None

    def test_free_prefix(self):
        assert self.ns.free_prefix('soap') == 'soap'
        assert self.ns.free_prefix('env') == 'env0'

        self.ns['env0'] = 'urn:x'
        assert self.ns.free_prefix('env') == 'env1'

    def test_copy(self):
        ns = self.ns.copy()
        ns['x'] = 'urn:x'

        assert isinstance(ns, Namespaces)
        assert 'x' not in self.ns

    def test_ns_declarations(self):
        root = etree.fromstring(b'<a xmlns="urn:default" xmlns:b="urn:b">'
                                b'<b:c xmlns:d="urn:d"/></a>')

        assert ns_declarations(root) == {'b': 'urn:b'}
        assert ns_declarations(root[0]) == {'b': 'urn:b', 'd': 'urn:d'}

    def test_ns_declarations_default(self):
        root = etree.fromstring(b'<a xmlns="urn:default" xmlns:b="urn:b"/>')

        assert ns_declarations(root, default=True) == {
            None: 'urn:default',
            'b': 'urn:b',
        }

    def test_payload_wrapper(self):
        start, end = payload_wrapper({'b': 'urn:b', None: 'urn:default'})

        root = etree.fromstring(start + b'<c/><b:d/>' + end)
        assert root[0].tag == '{urn:default}c'
        assert root[1].tag == '{urn:b}d'

    def test_payload_wrapper_no_namespaces(self):
        start, end = payload_wrapper(None)

        assert etree.fromstring(start + b'<c/>' + end)[0].tag == 'c'

    def test_payload_wrapper_escaping(self):
        start, end = payload_wrapper({'b': 'urn:b?x=1&y=2'})

        root = etree.fromstring(start + b'<b:d/>' + end)
        assert root[0].tag == '{urn:b?x=1&y=2}d'

    def test_payload_wrapper_invalid_prefix(self):
        self.assertRaises(ValueError, payload_wrapper, {'not a prefix': 'urn:b'})


if __name__ == '__main__':
    unittest.main()
