#!/usr/bin/env python
# -*- encoding: utf-8 -*-
"""Setup script"""

import io
import re
from os.path import dirname
from os.path import join

from setuptools import find_packages
from setuptools import setup


def _read(*names, **kwargs):
    return io.open(
        join(dirname(__file__), *names),
        encoding=kwargs.get('encoding', 'utf8')
    ).read()


setup(
    name='extendbed',
    version='0.1.0',
    license='GPL-3.0',
    description='Extend or truncate BED intervals within chromosome boundaries',
    long_description='%s\n%s' % (
        re.compile('^.. start-badges.*^.. end-badges',
                   re.M | re.S).sub('', _read('README.rst')),
        re.sub(':[a-z]+:`~?(.*?)`', r'``\1``', _read('CHANGELOG.rst'))
    ),
    long_description_content_type='text/x-rst',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    package_data={'extendbed': ['resources/*.bed',
                                'resources/*.chrom.sizes']},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    classifiers=[
        # complete list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: Unix',
        'Operating System :: POSIX',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ],
    keywords=[
        'genomics', 'bioinformatics', 'bed', 'intervals',
    ],
    install_requires=[
        'pandas',
        'pybedtools',
    ],
    extras_require={
        "test": ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'extendbed = extendbed.extendbed:main',
        ]
    }
)
