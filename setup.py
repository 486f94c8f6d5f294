"""ofxsimple setup file"""

from setuptools import setup, find_packages


def readme():
    with open('README.md') as f:
        return f.read()


setup(
    name='ofxsimple',
    version='0.1',
    description='Extract statements and transactions from simple OFX files.',
    long_description=readme(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: Public Domain',
        'Programming Language :: Python :: 3',
        'Topic :: Office/Business :: Financial :: Accounting',
    ],
    keywords='ofx qfx bank statement ledger-cli plaintextaccounting',
    license='Public Domain',
    packages=find_packages(exclude=['tests']),
    package_data={
        'ofxsimple': ['plugins/*/*.yapsy-plugin'],
    },
    install_requires=[
        'PyYaml',
        'yapsy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    include_package_data=True,
    zip_safe=False,
    entry_points={
        'console_scripts': [
            'ofx-parse=ofxsimple.cli:main',
        ]
    },
)
