# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'pytest>=7.0',
]

setup(
    name='gdapi-client',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    license='MIT',
    description='Client for hypermedia REST APIs following the gdapi convention',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    python_requires='>=3.8',
    tests_require=tests_require,
    install_requires=[
        'Flask>=2.2',
        'requests>=2.27',
        'jsonschema>=2.4.0',
        'blinker>=1.3',
        'rfc3987'
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'tests': tests_require,
    }
)
