from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs>=15.0',
    'pymongo>=4.0',
]

test_requirements = [
    'pytest>=7.0',
]

setup(
    name='tokenledger',
    version=__version__,
    description='Fungible and non-fungible token ledgers on a Python contract runtime.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
)
