
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


"""The `onvifsoap.util.xml` module contains the per-message namespace table
and the qualified name helpers built on top of it.
"""

from lxml import etree


class Namespaces(dict):
    """A mapping of xml namespace prefixes to namespace uris, of the form
    ``xmlns:<prefix> -> <uri>``. ::

        Namespaces({"tds": "http://www.onvif.org/ver10/device/wsdl"})

    Prefixes are not fixed by the protocol, so a fresh table is built for
    every message and lookups go both ways.
    """

    def copy(self):
        return Namespaces(self)

    def get_prefix(self, uri):
        """Returns the first prefix bound to the given uri, or ``None``."""

        for prefix, ns in self.items():
            if ns == uri:
                return prefix

        return None

    def resolve(self, qname):
        """Returns the ``(uri, localname)`` pair for a prefixed ``qname``
        string. Returns ``None`` when the value has no prefix or when its
        prefix is not bound in this table."""

        if not qname:
            return None

        prefix, sep, localname = qname.strip().partition(':')
        if not sep or not localname:
            return None

        uri = self.get(prefix)
        if uri is None:
            return None

        return uri, localname

    def qualify(self, uri, localname):
        """Returns the ``prefix:localname`` string for the given uri, or
        ``None`` when no prefix is bound to it."""

        prefix = self.get_prefix(uri)
        if prefix is None:
            return None

        return "%s:%s" % (prefix, localname)

    def free_prefix(self, preferred):
        """Returns ``preferred`` if it's not bound, otherwise the first
        numbered variant of it that isn't."""

        if preferred not in self:
            return preferred

        i = 0
        while "%s%d" % (preferred, i) in self:
            i += 1

        return "%s%d" % (preferred, i)


def ns_declarations(element, default=False):
    """Returns the namespace declarations of an lxml element, including the
    ones inherited from its ancestors. The default namespace is only included,
    under the ``None`` key, when ``default`` is ``True``."""

    return Namespaces((k, v) for k, v in element.nsmap.items()
                                                  if default or k is not None)


def payload_wrapper(namespaces):
    """Returns the start and end tags of an element declaring the given
    bindings, as bytes. A ``None`` prefix declares the default namespace.

    A fragment that was cut out of its document can be parsed between them
    with its original prefixes in scope.

    :raises ValueError: A prefix or a uri is not valid.
    """

    nsmap = dict((k, v) for k, v in (namespaces or {}).items() if v)

    tag = 'payload'
    if nsmap.get(None):
        tag = '{%s}payload' % nsmap[None]

    wrapper = etree.Element(tag, nsmap=nsmap)
    wrapper.text = 'x'

    # attribute values never contain a raw ">"
    head, _, tail = etree.tostring(wrapper).partition(b'>x</')

    return head + b'>', b'</' + tail
