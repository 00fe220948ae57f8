#!/usr/bin/env python
import os
import re

from setuptools import setup

here = os.path.dirname(os.path.abspath(__file__))


def read(*parts):
    with open(os.path.join(here, *parts)) as fh:
        return fh.read()

version = re.search(
    r"^__version__ = ['\"]([^'\"]+)['\"]",
    read('costream', '__init__.py'),
    re.M
).group(1)

setup(
    name='costream',
    version=version,
    description='''
        Stream pipelines out of coroutines: producers, transformers and
        consumers connected into a single pass, using greenlets.
    ''',
    long_description=read('README.txt'),
    packages=['costream', 'costream.core'],
    zip_safe=True,
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    install_requires=['greenlet>=1.0'],
    extras_require={
        'test': ['pytest'],
    },
    test_suite='tests'
)
