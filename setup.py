#!/usr/bin/python3

from setuptools import setup

setup(name='netstrings',
      version='1.0',
      description='Netstring encoder and incremental streaming decoder',
      packages=['netstrings'],
      python_requires='>=3.8',
      install_requires=['protobuf'],
      extras_require={'test': ['pytest']})

# vim: set ts=8 sts=4 sw=4 ai et :
