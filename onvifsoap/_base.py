
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

AUTH_MODE_NONE = 'none'
"""No credentials are sent."""

AUTH_MODE_WS_SECURITY = 'ws-security'
"""Credentials are sent in a WS-Security UsernameToken header inside the
envelope."""

AUTH_MODE_DIGEST = 'digest'
"""Credentials are sent by the Http transport, using digest
authentication."""

AUTH_MODE_RANK = {
    AUTH_MODE_NONE: 0,
    AUTH_MODE_WS_SECURITY: 1,
    AUTH_MODE_DIGEST: 2,
}
"""Auth modes only ever move up this ranking."""
