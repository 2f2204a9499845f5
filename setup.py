"""Setup splitscan package

"""

import re
from os import path

from setuptools import find_packages, setup

with open(path.join(path.dirname(path.abspath(__file__)), 'splitscan', '__init__.py')) as fh:
    __version__ = re.search(r"__version__ = '([^']+)'", fh.read()).group(1)

setup(
    name='splitscan',
    version=__version__,
    description='Segments of split and chimeric reads from indexed alignment files',
    license='MIT',
    packages=find_packages(include=['splitscan', 'splitscan.*']),
    python_requires='>=3.9',
    install_requires=[
        'intervaltree',
        'pandas',
        'pysam',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'splitscan=splitscan.__main__:main',
        ],
    },
)
