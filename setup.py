#!/usr/bin/python3

from setuptools import setup, find_packages

long_description = """check_rt is a Nagios compatible plugin which logs in to
the REST API of Request Tracker, runs a TicketSQL query and compares
the number of matching tickets with the warning and critical thresholds."""

requires = [
    'munch',
    'requests',
]

tests_require = [
    'pytest',
    'responses',
]

__name__ = 'check-rt'
__description__ = "Nagios plugin checking the number of tickets in Request Tracker"
__version__ = "1.0"


setup(
    name=__name__,
    version=__version__,
    description=__description__,
    long_description=long_description,
    license='GPLv2+',
    classifiers=[
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        'Programming Language :: Python :: 3',
        "Topic :: System :: Monitoring",
        "Development Status :: 4 - Beta",
    ],
    python_requires='>=3.6',
    install_requires=requires,
    extras_require={
        'test': tests_require,
    },
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    zip_safe=False,
    entry_points={
        'console_scripts': [
            'check_rt = check_rt.main:main'
        ]
    },
)
