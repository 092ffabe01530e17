import os

from setuptools import setup

import _version


__version__ = _version.__version__


appname = 'mcinfer'
appauthor = 'danielnyga'


with open(os.path.join(os.path.dirname(__file__), 'requirements.txt'), 'r') as f:
    requirements = [l.strip() for l in f.readlines() if l.strip()]


def description():
    try:
        with open('README.md') as f:
            return f.read()
    except OSError:
        return 'Monte Carlo inference (MC-SAT, forward sampling, likelihood weighting) in Python.'


setup(
    name='mcinfer',
    packages=['mcinfer', 'mcinfer._version', 'mcinfer.logic', 'mcinfer.bn',
        'mcinfer.inference'],
    package_dir={
        'mcinfer': 'mcinfer',
        'mcinfer._version': '_version',
    },
    version=__version__,
    description='Monte Carlo inference for weighted knowledge bases and belief networks',
    long_description=description(),
    author='Daniel Nyga',
    author_email='nyga@cs.uni-bremen.de',
    keywords=['statistical relational learning', 'mln', 'MC-SAT', 'sampling', 'bayesian networks'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Scientific/Engineering :: Artificial Intelligence ',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.6',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'mcinfertest=mcinfer.test_ci:main',
        ],
    },
)
