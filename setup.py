#!/usr/bin/python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
import os

ROOT = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(ROOT, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pyperftoolbox',
    include_package_data=True,
    package_data={'pyperftoolbox.gas': ['z_chart.csv']},
    version='0.1.0',
    packages=find_packages(),
    description='pyPerfToolbox - Well performance (IPR / OPR) curve utilities',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Mark W. Burgoyne',
    author_email='mark.w.burgoyne@gmail.com',
    keywords=['perftoolbox', 'petroleum', 'nodal', 'ipr', 'vlp'],
    classifiers=[],
    python_requires='>=3.9',
    install_requires=[
        'numpy',
        'scipy',
        'pandas',
    ],
    extras_require={
        'test': ['pytest'],
    }
)
