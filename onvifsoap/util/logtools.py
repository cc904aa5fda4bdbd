# coding: utf-8

"""Logging utilites."""

import logging

import onvifsoap.const


REQUEST = 'Request'
RESPONSE = 'Response'


def log_exchange(direction, data):
    """Default diagnostic dump hook of the client.

    Logs the fully serialized request or the raw response body to the
    :data:`onvifsoap.const.DUMP_LOGGER` logger at debug level. Enable it
    with: ::

        logging.getLogger('onvifsoap.client.dump').setLevel(logging.DEBUG)
    """

    logger = logging.getLogger(onvifsoap.const.DUMP_LOGGER)
    if not logger.isEnabledFor(logging.DEBUG):
        return

    if isinstance(data, bytes):
        data = data.decode('utf8', 'replace')

    logger.debug("%s:\n%s", direction, data)
