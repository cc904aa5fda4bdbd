
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

"""The ``onvifsoap.model.security`` module contains the WS-Security
UsernameToken header and its builder.

Only the PasswordDigest profile is implemented: the password never leaves the
client in plain text. Every request gets its own token, as the nonce and the
creation timestamp are what make a captured token useless for a replay.
"""

import os
import base64
import hashlib

from datetime import datetime

import pytz

import onvifsoap.const

from onvifsoap.const.xml import PASSWORD_DIGEST_TYPE, NONCE_ENCODING_TYPE
from onvifsoap.error import SecurityError


class UsernameToken(object):
    """A ``wsse:UsernameToken`` element.

    :param username: The user name, in plain text.
    :param password: The base64-encoded password digest.
    :param nonce: The base64-encoded nonce.
    :param created: The creation timestamp string.
    """

    def __init__(self, username, password, nonce, created,
                                   password_type=PASSWORD_DIGEST_TYPE,
                                   nonce_encoding=NONCE_ENCODING_TYPE):
        self.username = username
        self.password = password
        self.nonce = nonce
        self.created = created
        self.password_type = password_type
        self.nonce_encoding = nonce_encoding

    def __repr__(self):
        return "%s(username=%r, created=%r)" % (self.__class__.__name__,
                                                   self.username, self.created)


class Security(object):
    """A ``wsse:Security`` header block."""

    def __init__(self, username_token):
        self.username_token = username_token

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.username_token)


def _to_bytes(s):
    if isinstance(s, bytes):
        return s
    return s.encode('utf8')


def password_digest(nonce, created, password):
    """Returns ``base64(sha1(nonce + created + password))`` as a string.

    :param nonce: The raw nonce bytes, not their base64 form.
    :param created: The creation timestamp, exactly as it's sent.
    :param password: The plain text password.
    """

    hash = hashlib.sha1()
    hash.update(nonce)
    hash.update(_to_bytes(created))
    hash.update(_to_bytes(password))

    return base64.b64encode(hash.digest()).decode('ascii')


def utc_timestamp():
    """Returns the current UTC time, truncated to whole seconds and formatted
    with :data:`onvifsoap.const.CREATED_FORMAT`."""

    now = datetime.now(pytz.utc).replace(microsecond=0)
    return now.strftime(onvifsoap.const.CREATED_FORMAT)


def new_security(username, password):
    """Builds a fresh ``wsse:Security`` header for the given credentials.

    A new random nonce and a new timestamp are generated on every call, so
    the result must not be reused for another request.
    """

    try:
        nonce = os.urandom(onvifsoap.const.NONCE_SIZE)
    except (NotImplementedError, OSError) as e:
        raise SecurityError("could not generate nonce: %s" % e)

    created = utc_timestamp()

    return Security(UsernameToken(
        username=username,
        password=password_digest(nonce, created, password),
        nonce=base64.b64encode(nonce).decode('ascii'),
        created=created,
    ))
