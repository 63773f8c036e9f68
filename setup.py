import setuptools

setuptools.setup(
    name='date-range',
    version='0.1',
    packages=setuptools.find_namespace_packages(include=['date_range', 'date_range.*']),
    python_requires='>=3.11,<4',
    install_requires=[
        'absl-py>=2.1.0,<3',
        'jsonschema>=4.23.0,<5',
    ],
    extras_require={
        'test': [
            'pytest>=8.0.0,<9',
        ],
    },
)
