from setuptools import find_packages, setup


setup(
    name='strata',
    packages=find_packages(exclude=['tests', 'tests.*']),
    setup_requires='setupmeta',
    install_requires=[
        'cli2',
    ],
    extras_require=dict(
        test=[
            'pytest',
            'pytest-cov',
            'pytest-asyncio',
        ],
    ),
    entry_points={
        'console_scripts': [
            'strata = strata.cli:cli.entry_point',
        ],
    },
    author='James Pic',
    author_email='jamespic@gmail.com',
    url='https://yourlabs.io/oss/strata',
    include_package_data=True,
    license='MIT',
    keywords='container image build buildah',
    python_requires='>=3.8',
)
