
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

"""The ``onvifsoap.const`` package contains miscellanous constant values needed
in various parts of onvifsoap. They are read at call time, so they can be
tweaked at runtime."""


MIME_TYPE = 'application/soap+xml; charset=utf-8'
"""The Content-Type header value sent with every request."""

ENVELOPE_PREFIX = 'env'
"""The preferred namespace prefix for the Soap 1.2 envelope namespace when the
caller did not bind one itself."""

XML_ENCODING = 'UTF-8'
"""The encoding of outgoing envelopes."""

NONCE_SIZE = 16
"""Number of random bytes in a UsernameToken nonce."""

CREATED_FORMAT = '%Y-%m-%dT%H:%M:%S'
"""strftime format of the UsernameToken creation timestamp. It is always
rendered in UTC with second precision."""

UNAUTHORIZED_REASON = 'sender not authorized'
"""Fault reason text that signals an authorization failure. Compared
case-insensitively."""

MATCH_UNAUTHORIZED_REASON = True
"""When ``True``, a fault whose Code/Subcode pair does not mark it as an
authorization failure is still treated as one if its reason text matches
:data:`UNAUTHORIZED_REASON`."""

DUMP_LOGGER = 'onvifsoap.client.dump'
"""Name of the logger the default diagnostic dump hook writes to."""
