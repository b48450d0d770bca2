"""Install the OpenTok REST client package."""

from setuptools import setup, find_packages

setup(
    name='opentok-rest',
    version='2.3.0',
    packages=find_packages(exclude=['*tests*']),
    python_requires='>=3.8',
    install_requires=[
        "pyjwt>=2",
        "requests",
        "pytz",
        "click",
    ],
    extras_require={
        'test': ["pytest", "hypothesis"],
    },
    entry_points={
        'console_scripts': [
            'opentok-token=opentok_rest.cli:main',
        ],
    },
    zip_safe=False
)
