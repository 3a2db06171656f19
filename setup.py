"""
LinkFix - Repair SharePoint Online link items

Installation:
    pip install -e .

This installs the 'linkfix' command globally in your environment.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='linkfix',
    version='1.0.0',
    description='Recreate SharePoint "Link to a Document" items from a known-good template',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Dale Chapman',
    author_email='',  # Add your email if desired
    license='MIT',

    # Find all packages (linkfix/ and any subpackages)
    packages=find_packages(exclude=['tests', 'tests.*', 'docs']),

    # Python version requirement
    python_requires='>=3.9',

    # Dependencies
    install_requires=[
        'click>=8.0',
        'PyYAML>=6.0',
        'Office365-REST-Python-Client>=2.5',
    ],

    # Optional dependencies
    extras_require={
        'dev': [
            'pytest>=7.4,<9.1',  # 9.1 attaches capture handlers to non-propagating loggers
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
        ],
    },

    # CLI entry point - this creates the 'linkfix' command
    entry_points={
        'console_scripts': [
            'linkfix=linkfix.cli:cli',
        ],
    },

    # Classifiers for PyPI
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Office/Business',
    ],

    # Keywords for discoverability
    keywords='sharepoint office365 links migration',
)
