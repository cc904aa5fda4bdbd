
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

"""This module contains the utility methods that convert a response payload
from an ElementTree hierarchy to python dicts.
"""

from collections import OrderedDict

from lxml import etree


def root_etree_to_dict(element, iterable=(list, list.append)):
    """Takes an xml root element and returns the corresponding dict. The second
    argument is a pair of iterable type and the function used to add elements to
    the iterable. The xml attributes are ignored, namespaces are stripped.
    """

    element = etree_strip_namespaces(element)
    return {element.tag: iterable[0]([etree_to_dict(element, iterable)])}


def etree_to_dict(element, iterable=(list, list.append)):
    """Takes an xml element and returns the corresponding dict, or its text
    when it has no children."""

    if (element.text is None) or element.text.isspace():
        retval = OrderedDict()
        for elt in element:
            if not isinstance(elt.tag, str):
                continue
            if not (elt.tag in retval):
                retval[elt.tag] = iterable[0]()
            iterable[1](retval[elt.tag], etree_to_dict(elt, iterable))

    else:
        retval = element.text

    return retval


def etree_strip_namespaces(element):
    """Removes any namespace information form the given element recursively."""

    retval = etree.Element(etree.QName(element).localname)
    retval.text = element.text
    for a in element.attrib:
        retval.attrib[etree.QName(a).localname] = element.attrib[a]

    for e in element:
        if isinstance(e.tag, str):
            retval.append(etree_strip_namespaces(e))

    return retval
