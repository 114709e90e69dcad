from setuptools import setup, find_packages

# -------------------------------------------------------------------------------------------------
install_requires = [
    'colorama',
    'PyFFI',
]

# -------------------------------------------------------------------------------------------------
setup(
    name='sa_formats',
    version='0.1',
    packages=find_packages(include=['sa_formats', 'sa_formats.*']),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
