#!/usr/bin/env python

"""Setup script for the statictable module distribution."""
from setuptools import setup

from statictable import __version__ as statictable_version

with open('README.md') as readme:
    long_description_text = readme.read()

modules = ["statictable"]

setup(# Distribution meta-data
    name="statictable",
    version=statictable_version,
    description="Immutable in-memory table with named columns, indexing and predicate search",
    long_description=long_description_text,
    long_description_content_type='text/markdown',
    author="The statictable authors",
    license="MIT License",
    py_modules=modules,
    python_requires=">=3.9",
    extras_require={
        "rich": ["rich"],
        "test": ["rich"],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Topic :: Database',
        ]
    )
