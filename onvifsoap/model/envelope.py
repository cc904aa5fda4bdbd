
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

"""The ``onvifsoap.model.envelope`` module contains the Soap envelope
structure. Instances are scoped to a single call.

The body payload is kept as raw bytes: it's up to the caller to bind the
prefixes its payload uses on the outgoing envelope, and to unmarshal the
incoming payload with :meth:`Body.unmarshal`.
"""

from lxml import etree
from lxml.etree import XMLSyntaxError

from onvifsoap.error import NoResponseError
from onvifsoap.error import UnmarshalError
from onvifsoap.util.etreeconv import root_etree_to_dict
from onvifsoap.util.xml import Namespaces
from onvifsoap.util.xml import payload_wrapper


class Header(object):
    """A Soap header.

    :param security: A :class:`onvifsoap.model.security.Security` instance,
        or ``None``.
    :param elements: Other header entries as lxml elements. Only populated on
        decode.
    """

    def __init__(self, security=None, elements=None):
        self.security = security
        self.elements = elements if elements is not None else []

    def is_empty(self):
        return self.security is None and len(self.elements) == 0


class Body(object):
    """A Soap body.

    :param payload: The exact inner xml of the body, as bytes.
    :param fault: A :class:`onvifsoap.model.fault.Fault` when the body carries
        one. The payload is retained regardless.
    :param namespaces: The bindings in scope at the Body element, needed to
        make sense of the prefixes in the payload. The default namespace, if
        any, is under the ``None`` key.
    """

    def __init__(self, payload=b'', fault=None, namespaces=None):
        self.payload = payload
        self.fault = fault
        self.namespaces = namespaces

    def __len__(self):
        return len(self.payload)

    def unmarshal(self, as_dict=False):
        """Parses the first element of the payload and returns it as an lxml
        element, or as a dict built by
        :func:`onvifsoap.util.etreeconv.root_etree_to_dict` when ``as_dict``
        is ``True``."""

        if len(self.payload.strip()) == 0:
            raise NoResponseError("body is empty: server did not return "
                                                                  "a response")

        # the payload refers to prefixes declared on its ancestors, so it's
        # parsed inside a wrapper that re-declares them.
        try:
            start, end = payload_wrapper(self.namespaces)
            root = etree.fromstring(start + self.payload + end)

        except (XMLSyntaxError, ValueError) as e:
            raise UnmarshalError("could not unmarshal: %s" % e)

        for elt in root:
            if isinstance(elt.tag, str):
                if as_dict:
                    return root_etree_to_dict(elt)
                return elt

        raise NoResponseError("body has no element: server did not return "
                                                                  "a response")


class Envelope(object):
    """A Soap 1.2 envelope.

    :param namespaces: The namespace bindings declared on the root element,
        as a :class:`onvifsoap.util.xml.Namespaces` instance or a plain dict.
    :param header: A :class:`Header`, or ``None``.
    :param body: A :class:`Body`. Guaranteed to be set on decoded envelopes.
    """

    def __init__(self, namespaces=None, header=None, body=None):
        self.namespaces = Namespaces(namespaces or {})
        self.header = header
        self.body = body

    def __repr__(self):
        return "%s(namespaces=%r, header=%r, body=%r)" % (
                          self.__class__.__name__, dict(self.namespaces),
                          self.header, self.body)
