#!/usr/bin/env python

from setuptools import setup, find_packages
import os

from txscript import __version__

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.md')) as f:
    README = f.read()

requires = []

setup(name='python-txscript',
      version=__version__,
      description='Decode, recognize and build transaction scripts for Bitcoin-based networks.',
      long_description=README,
      long_description_content_type='text/markdown',
      classifiers=[
          "Programming Language :: Python",
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
      ],
      keywords='bitcoin script',
      packages=find_packages(include=['txscript', 'txscript.*']),
      zip_safe=False,
      python_requires='>=3.6',
      install_requires=requires,
      extras_require={'test': ['pytest']},
     )
