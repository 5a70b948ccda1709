from setuptools import setup, find_packages

setup(
    name="tinychain",
    description="A tamper-evident chain of blocks, small enough to read in one sitting",
    long_description=open("README.md", 'r').read(),
    long_description_content_type='text/markdown',

    install_requires=[
        "immutables>=0.15",
        "ptpython",
    ],

    extras_require={
        "test": ["pytest"],
    },

    packages=find_packages(exclude=["tests", "tests.*"]),

    setup_requires=["setuptools_scm"],
    use_scm_version={
        "write_to": "tinychain/scmversion.py",
        "write_to_template": "__version__ = '{version}'\n",
        "fallback_version": "0.1.0",
    },

    include_package_data=True,

    entry_points={
        'console_scripts': [
            'tinychain-version=tinychain.scripts.version:main',
            'tinychain-build=tinychain.scripts.build:main',
            'tinychain-repl=tinychain.scripts.repl:main',
        ],
    },

    license="BSD-3-Clause",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',

        'Intended Audience :: Developers',
        'Intended Audience :: Education',

        'License :: OSI Approved :: BSD License',

        'Operating System :: OS Independent',

        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
