
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

import onvifsoap.const

from onvifsoap.const.xml import NS_SOAP12_ENV, NS_ONVIF_ERROR
from onvifsoap.error import OnvifSoapError
from onvifsoap.error import UnresolvedNamespacesError


class Fault(OnvifSoapError):
    """A Soap 1.2 fault returned by the remote end. It's raised by the client
    for every fault that is not an authorization failure.

    The `Soap 1.2 Fault definition <http://www.w3.org/TR/soap12-part1/#soapfault>`_
    carries a code, an optional subcode and a human-readable reason:

    :param code: The ``Code/Value`` qname string, e.g. ``'env:Sender'``.
    :param subcode: The ``Code/Subcode/Value`` qname string, e.g.
        ``'ter:NotAuthorized'``.
    :param reason: The ``Reason/Text`` string.
    :param node: The ``Node`` uri, if any.
    :param role: The ``Role`` uri, if any.
    :param detail: The raw bytes of the ``Detail`` element's content.
    :param namespaces: The :class:`onvifsoap.util.xml.Namespaces` table the
        code and subcode prefixes are resolved against. A fault does not carry
        enough scoping information on its own, so the codec copies it from
        the owning envelope.
    """

    def __init__(self, code='', subcode='', reason='', node='', role='',
                                                 detail=b'', namespaces=None):
        self.code = code
        self.subcode = subcode
        self.reason = reason
        self.node = node
        self.role = role
        self.detail = detail
        self.namespaces = namespaces

        super(Fault, self).__init__(code, subcode, reason)

    def __str__(self):
        codes = [c for c in (self.code, self.subcode) if c]
        if codes:
            return "SOAP fault (%s): %s" % (', '.join(codes), self.reason)

        return "SOAP fault: %s" % (self.reason,)

    def __repr__(self):
        return "%s(%r, %r, %r)" % (self.__class__.__name__, self.code,
                                                     self.subcode, self.reason)

    def has_unauthorized_code(self):
        """Returns ``True`` iff the code is ``Sender`` in the Soap envelope
        namespace and the subcode is ``NotAuthorized`` in the ONVIF error
        namespace. Both are resolved through the fault's own namespace table;
        an unbound prefix never matches."""

        if self.namespaces is None:
            raise UnresolvedNamespacesError()

        return self.namespaces.resolve(self.code) == (NS_SOAP12_ENV, 'Sender') \
            and self.namespaces.resolve(self.subcode) == \
                                              (NS_ONVIF_ERROR, 'NotAuthorized')

    def has_unauthorized_reason(self):
        """Returns ``True`` iff the reason text reads "sender not authorized",
        case-insensitively."""

        if not self.reason:
            return False

        return self.reason.strip().lower() == \
                                    onvifsoap.const.UNAUTHORIZED_REASON.lower()

    def is_unauthorized(self):
        """Returns ``True`` if the fault signals an authorization failure.

        The Code/Subcode pair decides. The reason text is only consulted as a
        fallback, when :data:`onvifsoap.const.MATCH_UNAUTHORIZED_REASON` is
        set.
        """

        if self.has_unauthorized_code():
            return True

        if onvifsoap.const.MATCH_UNAUTHORIZED_REASON:
            return self.has_unauthorized_reason()

        return False
