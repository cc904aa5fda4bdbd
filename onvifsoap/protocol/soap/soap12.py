
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

"""
The ``onvifsoap.protocol.soap.soap12`` module contains the Soap 1.2 envelope
codec.

The body payload is opaque to the codec: it's written verbatim on the way
out, and the exact source bytes between the Body tags are kept on the way in.
Namespace prefixes are never assumed; they're recovered from every message.

Invalid documents are logged to %r at debug level.
""" % (__name__ + ".invalid")

import logging
logger = logging.getLogger(__name__)
logger_invalid = logging.getLogger(__name__ + ".invalid")

import re

from copy import deepcopy

from html import escape

from lxml import etree
from lxml.etree import XMLSyntaxError as _LxmlSyntaxError

import onvifsoap.const

from onvifsoap.const.xml import NS_SOAP12_ENV, NS_WSSE, NS_WSU
from onvifsoap.const.xml import SOAP12_ENV, WSSE, WSU
from onvifsoap.error import MarshalError
from onvifsoap.error import MissingBodyError
from onvifsoap.error import UnexpectedElementError
from onvifsoap.error import UnexpectedTokenError
from onvifsoap.error import XmlSyntaxError
from onvifsoap.model.envelope import Body
from onvifsoap.model.envelope import Envelope
from onvifsoap.model.envelope import Header
from onvifsoap.model.fault import Fault
from onvifsoap.model.security import Security
from onvifsoap.model.security import UsernameToken
from onvifsoap.util.xml import Namespaces
from onvifsoap.util.xml import ns_declarations
from onvifsoap.util.xml import payload_wrapper


_ENV_NS = {'e': NS_SOAP12_ENV}


def to_payload(obj):
    """Returns the body payload bytes for ``obj``, which can be ``bytes``,
    ``str`` or an lxml element."""

    if obj is None:
        return b''

    if isinstance(obj, bytes):
        return obj

    if isinstance(obj, str):
        return obj.encode('utf8')

    if etree.iselement(obj):
        return etree.tostring(obj, encoding='UTF-8')

    raise MarshalError("could not marshal request: unsupported payload type "
                                                            "%r" % type(obj))


def _text(elt):
    if elt is None or elt.text is None:
        return ''
    return elt.text.strip()


def _tag_end(data, pos):
    """Returns the index of the ``>`` that closes the tag starting before
    ``pos``, skipping quoted attribute values."""

    quote = None
    for i in range(pos, len(data)):
        c = data[i:i + 1]
        if quote is not None:
            if c == quote:
                quote = None
        elif c in (b'"', b"'"):
            quote = c
        elif c == b'>':
            return i

    return -1


_SKIPPED = br'<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>|' \
                                          br'<!DOCTYPE(?:[^\[>]|\[.*?\])*>'
"""Regions where markup-looking bytes are not markup."""


def _scan_content(data, qname):
    """Returns the bytes between the first start tag named ``qname`` and its
    matching end tag, or ``None``. Comments, CDATA sections, processing
    instructions and the doctype are skipped."""

    scanner = re.compile(br'(?P<skip>' + _SKIPPED + br')|<(?P<close>/)?' +
                                     re.escape(qname) + br'(?=[\s/>])', re.S)

    start = None
    depth = 0
    for match in scanner.finditer(data):
        if match.group('skip') is not None:
            continue

        if match.group('close') is not None:
            if start is None:
                return None
            if depth == 0:
                return data[start:match.start()]
            depth -= 1
            continue

        end = _tag_end(data, match.end())
        if end < 0:
            return None

        if data[end - 1:end] == b'/':
            if start is None:
                return b''
            continue

        if start is None:
            start = end + 1
        else:
            depth += 1

    return None


def _same_tree(a, b):
    if a.tag != b.tag or dict(a.attrib) != dict(b.attrib):
        return False

    if (a.text or '') != (b.text or '') or (a.tail or '') != (b.tail or ''):
        return False

    return len(a) == len(b) and all(_same_tree(x, y) for x, y in zip(a, b))


def _serialize_content(elt):
    content = [escape(elt.text, quote=False).encode('utf8')] if elt.text else []
    content.extend(etree.tostring(c, encoding='UTF-8') for c in elt)
    return b''.join(content)


class Soap12(object):
    """The Soap 1.2 envelope codec. The document is available here:
    http://www.w3.org/TR/soap12/
    """

    ns_soap_env = NS_SOAP12_ENV

    def __init__(self, parser=None):
        if parser is None:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
        self.parser = parser

    #
    # Encoding
    #

    def encode(self, envelope):
        """Serializes the envelope to bytes.

        The Soap envelope namespace and every binding in
        ``envelope.namespaces`` are declared on the root element only.
        """

        namespaces = Namespaces(envelope.namespaces or {})

        soap_env = namespaces.get_prefix(self.ns_soap_env)
        if soap_env is None:
            soap_env = namespaces.free_prefix(onvifsoap.const.ENVELOPE_PREFIX)

        nsmap = {soap_env: self.ns_soap_env}
        nsmap.update(namespaces)

        try:
            root = etree.Element(SOAP12_ENV('Envelope'), nsmap=nsmap)
        except (TypeError, ValueError) as e:
            raise MarshalError("could not encode envelope: %s" % e)

        header = envelope.header
        if header is not None and not header.is_empty():
            header_elt = etree.SubElement(root, SOAP12_ENV('Header'))
            if header.security is not None:
                self.security_to_parent(header.security, header_elt)
            for elt in header.elements:
                header_elt.append(deepcopy(elt))

        body_elt = etree.SubElement(root, SOAP12_ENV('Body'))

        payload = b''
        if envelope.body is not None:
            payload = to_payload(envelope.body.payload)

        document = etree.tostring(root, xml_declaration=True,
                                      encoding=onvifsoap.const.XML_ENCODING)

        # the body is the last element, so its empty tag is what closes the
        # document before the envelope end tag.
        qname = ('%s:Body' % body_elt.prefix).encode('utf8')
        head, sep, tail = document.rpartition(b'<' + qname + b'/>')
        if not sep:
            raise MarshalError("could not encode body")

        return b''.join((head, b'<', qname, b'>', payload, b'</', qname, b'>',
                                                                         tail))

    def security_to_parent(self, security, parent):
        sec = etree.SubElement(parent, WSSE('Security'),
                                      nsmap={'wsse': NS_WSSE, 'wsu': NS_WSU})

        token = security.username_token
        if token is None:
            return sec

        token_elt = etree.SubElement(sec, WSSE('UsernameToken'))
        etree.SubElement(token_elt, WSSE('Username')).text = token.username
        etree.SubElement(token_elt, WSSE('Password'),
                                   Type=token.password_type).text = token.password
        etree.SubElement(token_elt, WSSE('Nonce'),
                              EncodingType=token.nonce_encoding).text = token.nonce
        etree.SubElement(token_elt, WSU('Created')).text = token.created

        return sec

    #
    # Decoding
    #

    def decode(self, data):
        """Parses the response bytes into an :class:`Envelope` whose body is
        guaranteed to be set.

        :raises XmlSyntaxError: The document is not well-formed.
        :raises UnexpectedElementError: The root is not a Soap 1.2 envelope or
            it has children other than one Header and one Body.
        :raises UnexpectedTokenError: There's text between the Header and
            Body elements.
        :raises MissingBodyError: There's no Body element.
        """

        if isinstance(data, str):
            data = data.encode('utf8')

        if len(data.strip()) == 0:
            raise XmlSyntaxError("could not decode token: document is empty")

        try:
            root = etree.fromstring(data, self.parser)

        except (_LxmlSyntaxError, ValueError) as e:
            logger_invalid.debug("%r in string %r", e, data)
            raise XmlSyntaxError("could not decode token: %s" % e)

        if root.tag != SOAP12_ENV('Envelope'):
            raise UnexpectedElementError(root.tag)

        namespaces = ns_declarations(root)

        if root.text is not None and root.text.strip():
            raise UnexpectedTokenError(root.text.strip())

        header = None
        body_elt = None
        for child in root:
            if child.tail is not None and child.tail.strip():
                raise UnexpectedTokenError(child.tail.strip())

            # comments and processing instructions
            if not isinstance(child.tag, str):
                continue

            if child.tag == SOAP12_ENV('Header') and header is None:
                header = self.header_from_element(child)

            elif child.tag == SOAP12_ENV('Body') and body_elt is None:
                body_elt = child

            else:
                raise UnexpectedElementError(child.tag)

        if body_elt is None:
            raise MissingBodyError()

        body = Body(payload=self.inner_bytes(data, body_elt),
                            namespaces=ns_declarations(body_elt, default=True))

        for elt in body_elt:
            if isinstance(elt.tag, str):
                if elt.tag == SOAP12_ENV('Fault'):
                    body.fault = self.fault_from_element(elt, namespaces)
                break

        return Envelope(namespaces=namespaces, header=header, body=body)

    def inner_bytes(self, data, elt):
        """Returns the exact source bytes between the start and end tags of
        ``elt``. Falls back to re-serializing its content when the source
        can't be matched, e.g. for documents not encoded in utf-8."""

        if elt.prefix is None:
            qname = etree.QName(elt).localname.encode('utf8')
        else:
            qname = ('%s:%s' % (elt.prefix,
                                   etree.QName(elt).localname)).encode('utf8')

        retval = _scan_content(data, qname)
        if retval is None or not self.same_content(retval, elt):
            logger.debug("could not locate the source of %r, re-serializing",
                                                                      elt.tag)
            return _serialize_content(elt)

        return retval

    def same_content(self, fragment, elt):
        """Returns ``True`` if ``fragment`` parses, with the namespaces in
        scope at ``elt``, to the same content as ``elt``."""

        try:
            start, end = payload_wrapper(elt.nsmap)
            other = etree.fromstring(start + fragment + end, self.parser)

        except (_LxmlSyntaxError, ValueError):
            return False

        return (other.text or '') == (elt.text or '') and \
                            len(other) == len(elt) and \
                            all(_same_tree(a, b) for a, b in zip(other, elt))

    def header_from_element(self, element):
        header = Header()

        for child in element:
            if not isinstance(child.tag, str):
                continue

            if child.tag == WSSE('Security') and header.security is None:
                header.security = self.security_from_element(child)
            else:
                header.elements.append(child)

        return header

    def security_from_element(self, element):
        token = element.find(WSSE('UsernameToken'))
        if token is None:
            return Security(None)

        password = token.find(WSSE('Password'))
        nonce = token.find(WSSE('Nonce'))

        kwargs = {}
        if password is not None and password.get('Type'):
            kwargs['password_type'] = password.get('Type')
        if nonce is not None and nonce.get('EncodingType'):
            kwargs['nonce_encoding'] = nonce.get('EncodingType')

        return Security(UsernameToken(
            username=_text(token.find(WSSE('Username'))),
            password=_text(password),
            nonce=_text(nonce),
            created=_text(token.find(WSU('Created'))),
            **kwargs
        ))

    def fault_from_element(self, element, namespaces):
        """Builds a :class:`Fault` from a ``Fault`` element.

        The fault gets a copy of the envelope bindings, overlaid with the
        declarations in scope where the code values are, so that prefixes
        declared inside the fault resolve as well.
        """

        code = element.find('e:Code/e:Value', namespaces=_ENV_NS)
        subcode = element.find('e:Code/e:Subcode/e:Value', namespaces=_ENV_NS)

        scope = element
        if subcode is not None:
            scope = subcode
        elif code is not None:
            scope = code

        fault_ns = namespaces.copy()
        fault_ns.update(ns_declarations(scope))

        detail = element.find('e:Detail', namespaces=_ENV_NS)
        if detail is not None:
            detail = b''.join(etree.tostring(c, encoding='UTF-8')
                                                                for c in detail)
        else:
            detail = b''

        return Fault(
            code=_text(code),
            subcode=_text(subcode),
            reason=_text(element.find('e:Reason/e:Text', namespaces=_ENV_NS)),
            node=_text(element.find('e:Node', namespaces=_ENV_NS)),
            role=_text(element.find('e:Role', namespaces=_ENV_NS)),
            detail=detail,
            namespaces=fault_ns,
        )


_soap12 = Soap12()


def encode(envelope):
    """Serializes the envelope with the default :class:`Soap12` codec."""

    return _soap12.encode(envelope)


def decode(data):
    """Parses the bytes with the default :class:`Soap12` codec."""

    return _soap12.decode(data)
