
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

"""The ``onvifsoap.const.xml`` module contains the XML namespaces and the
WS-Security profile identifiers used on the wire.
"""

NS_SOAP12_ENV = 'http://www.w3.org/2003/05/soap-envelope'

NS_WSSE = 'http://docs.oasis-open.org/wss/2004/01/' \
                                   'oasis-200401-wss-wssecurity-secext-1.0.xsd'
NS_WSU = 'http://docs.oasis-open.org/wss/2004/01/' \
                                  'oasis-200401-wss-wssecurity-utility-1.0.xsd'

NS_ONVIF_ERROR = 'http://www.onvif.org/ver10/error'

PASSWORD_DIGEST_TYPE = 'http://docs.oasis-open.org/wss/2004/01/' \
                  'oasis-200401-wss-username-token-profile-1.0#PasswordDigest'
NONCE_ENCODING_TYPE = 'http://docs.oasis-open.org/wss/2004/01/' \
                    'oasis-200401-wss-soap-message-security-1.0#Base64Binary'


def Tnswrap(ns):
    return lambda s: "{%s}%s" % (ns, s)

SOAP12_ENV = Tnswrap(NS_SOAP12_ENV)
WSSE = Tnswrap(NS_WSSE)
WSU = Tnswrap(NS_WSU)
