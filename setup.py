"""Sampling and interpolation of two-dimensional distributions tabulated on a grid.
"""

from setuptools import setup, find_packages

short_description = __doc__.strip()

with open('requirements.txt') as inn:
    requirements = inn.read().splitlines()

with open("README.md", "r") as inn:
    long_description = inn.read().strip()

with open('pdf2d/VERSION.txt') as inn:
    version = inn.read().strip()

setup(
    name="pdf2d",
    author="pdf2d Contributors",
    version=version,
    description=short_description,
    license="MIT",
    packages=find_packages(),
    package_data={'pdf2d': ['VERSION.txt']},
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    long_description=long_description,
    long_description_content_type='text/markdown',
    # Python version restrictions
    python_requires=">=3.8",

    keywords=['statistics', 'probability', 'sampling', 'monte carlo',
              'inverse transform sampling', 'bilinear interpolation',
              'tabulated distribution'],
)
