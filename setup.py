# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Build and installation script for rui."""


# standard libs
import re
from setuptools import setup, find_packages


# Description from README.rst
with open('README.rst', mode='r') as readme:
    long_description = readme.read()


# Metadata by parsing __init__
with open('src/rui/__init__.py', mode='r') as source:
    content = source.read().strip()
    metadata = {key: re.search(key + r'\s*=\s*[\'"]([^\'"]*)[\'"]', content).group(1)
                for key in ['__version__', '__authors__', '__contact__',
                            '__description__', '__license__', '__keywords__', '__website__']}


# Core dependencies
DEPS = ['cmdkit>=2.6.0', 'rich>=10.16.2']


setup(
    name             = 'rui',
    version          = metadata['__version__'],
    author           = metadata['__authors__'],
    author_email     = metadata['__contact__'],
    description      = metadata['__description__'],
    license          = metadata['__license__'],
    keywords         = metadata['__keywords__'],
    url              = metadata['__website__'],
    packages         = find_packages('src'),
    package_dir      = {'': 'src', },
    include_package_data = True,
    long_description = long_description,
    long_description_content_type = 'text/x-rst',
    classifiers      = ['Development Status :: 4 - Beta',
                        'Topic :: Utilities',
                        'Topic :: System :: Systems Administration',
                        'Programming Language :: Python :: 3.9',
                        'Programming Language :: Python :: 3.10',
                        'Programming Language :: Python :: 3.11',
                        'Operating System :: POSIX :: Linux',
                        'License :: OSI Approved :: Apache Software License', ],
    python_requires  = '>=3.9',
    install_requires = DEPS,
    extras_require = {
        'test': ['pytest>=7.0', ],
    },
    entry_points     = {'console_scripts': ['rui=rui:main', ]},
)
