from setuptools import setup, find_packages  # Always prefer setuptools over distutils
from codecs import open  # To use a consistent encoding
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the relevant file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    readme = f.read()


setup(
    name='maskali',

    # Version:
    version='0.1.0',

    description='Reference-column projection of hmmalign output',
    long_description=readme,
    long_description_content_type='text/markdown',

    # Choose your license
    license='MIT',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        # How mature is this project? Common values are
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 3 - Alpha',

        # Indicate who your project is intended for
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: Bio-Informatics',

        # The license as you wish (should match "license" above)
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],

    # What maskali relates to:
    keywords='hmmer hmmalign stockholm alignment',

    # Specify  packages via find_packages() and exclude the tests:
    packages=find_packages(exclude=['test', 'test.*']),

    python_requires='>=3.8',

    # Entry points provide cross-platform support and allow
    # pip to create the appropriate form of executable for the target platform.
    # IMPORTANT: script names need to be in lower case ! ! ! (otherwise
    # deinstallation does not work)
    entry_points={
        'console_scripts': [
            'maskali=maskali.utils.app:app',
        ],
    },

    # Runtime dependencies. (will be installed by pip when maskali is installed)
    install_requires=['setuptools>=18.2', 'numpy', 'ruamel.yaml>=0.17', 'click'],

    extras_require={
        'test': ['pytest'],
    },

)
