#!/usr/bin/env python
# coding: utf-8

from setuptools import setup, find_packages


setup(
    name='discovery-bootstrap',
    version='0.1',
    license='BSD',
    description=
        'join or leave peer discovery for the weave router',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'docker>=4.0',
        'click>=7.0',
        'netifaces>=0.10',
        'requests>=2.20',
        'clint>=0.5.1',
    ],
    extras_require={
        'test': [
            'pytest',
            'mock',
            'responses',
        ],
    },
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: BSD License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    entry_points="""
[console_scripts]
discovery = discoverylib.cli:run
""",
)
