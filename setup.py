import os
from setuptools import setup

# Utility function to read the README file.
# Used for the long_description.
def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()

setup(
    name="kkbalance",
    version="0.1.0",
    description=("Karmarkar-Karp multiway number partitioning for balancing weighted work across workers."),
    license="BSD",
    keywords="partition load-balancing karmarkar-karp",
    packages=['kkbalance'],
    long_description=read('README'),
    python_requires='>=3.8',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Topic :: Utilities",
        "License :: OSI Approved :: BSD License",
    ],
    install_requires=[
        'Click',
        'numpy',
        'pandas',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        kkbalance=kkbalance.cli:cli
    ''',
)
