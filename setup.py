from setuptools import setup

with open('README.txt', 'r', encoding='UTF-8') as readme_file:
    long_description = readme_file.read()

setup(
    name='resctrl-tests',
    version='1.0.0',
    description='Conformance tests for Linux resctrl filesystem',
    long_description=long_description,
    long_description_content_type='text/plain',
    license='BSD 3-Clause License',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: BSD License',
        'Operating System :: POSIX :: Linux'
    ],
    packages=['resctrl_tests'],
    package_data={'resctrl_tests': ['schema/*.json']},
    install_requires=[
        'psutil',
        'jsonschema'
    ],
    extras_require={
        'test': ['pytest', 'mock']
    },
    entry_points={
        'console_scripts': ['resctrl_tests=resctrl_tests.resctrl_tests:main']
    },
    python_requires='>=3.9'
)
