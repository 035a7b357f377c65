"""
ptbnom setup: ptbnom is a library for navigating Penn Treebank parse
trees and the NomBank annotations that point into them
"""

from setuptools import setup, find_packages

REQS = [
    'funcparserlib',
    'frozendict',
    'tabulate',
    'nltk >= 3.0.0, < 3.10',
]


setup(name='ptbnom',
      version='0.1',
      packages=find_packages(include=['ptbnom', 'ptbnom.*']),
      package_data={'ptbnom.ptb': ['collins_head_rules']},
      install_requires=REQS,
      extras_require={'test': ['pytest']})
