#!/usr/bin/env python
#encoding: utf8

import io
import os
import re
import inspect

from os.path import join, dirname, abspath

from setuptools import setup
from setuptools import Command
from setuptools import find_packages

OWN_PATH = abspath(inspect.getfile(inspect.currentframe()))
TESTS_DIR = join(dirname(OWN_PATH), 'onvifsoap', 'test')

with io.open(os.path.join(os.path.dirname(__file__), 'onvifsoap', '__init__.py'), 'r') as v:
    VERSION = re.match(r".*__version__ = '(.*?)'", v.read(), re.S).group(1)

SHORT_DESC="A Soap 1.2 client core for ONVIF devices, with envelope codec, " \
"WS-Security UsernameToken digests and auth mode negotiation."

LONG_DESC = """onvifsoap sends Soap 1.2 requests to ONVIF devices. It encodes and
decodes envelopes without assuming any namespace prefix, builds WS-Security
UsernameToken PasswordDigest headers, classifies authorization faults and
negotiates the authentication scheme (none, WS-Security or Http digest) with
the device on the first rejected request.
"""

try:
    os.stat('CHANGELOG.rst')
    with io.open('CHANGELOG.rst', 'rb') as f:
        LONG_DESC += u"\n\n" + f.read().decode('utf8')
except OSError:
    pass


###############################
# Testing stuff

class RunTests(Command):
    """Runs the test suite with py.test."""

    user_options = [
        ('capture=', 'k', "py.test output capture control (see py.test "
                          "--capture)"),
    ]

    def initialize_options(self):
        self.capture = 'fd'

    def finalize_options(self):
        pass

    def run(self):
        import pytest

        args = [
            '--verbose',
            '--tb=short',
            '--capture=%s' % self.capture,
            TESTS_DIR,
        ]

        raise SystemExit(pytest.main(args))


# Testing stuff ends here.
###############################

setup(
    name='onvifsoap',
    packages=find_packages(include=['onvifsoap', 'onvifsoap.*']),

    version=VERSION,
    description=SHORT_DESC,
    long_description=LONG_DESC,
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Operating System :: OS Independent',
        'Natural Language :: English',
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Multimedia :: Video :: Capture',
    ],
    keywords='onvif soap ws-security digest xml camera',
    license='LGPL-2.1',
    zip_safe=False,
    python_requires='>=3.6',
    install_requires=[
      'lxml',
      'pytz',
    ],
    extras_require={
      'test': ['pytest'],
    },

    cmdclass = {
        'test': RunTests,
    },
)
