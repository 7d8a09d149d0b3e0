"""Setup covprofiler package

"""

from setuptools import find_packages, setup

setup(
    name='covprofiler',
    version='0.1.0',
    description="Coverage profiles across the CDS and 3'-UTR of transcripts",
    license='MIT',
    python_requires='>=3.9',
    packages=find_packages(include=['covprofiler', 'covprofiler.*']),
    install_requires=[
        'numpy',
        'pandas',
        'pysam',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'covprofiler = covprofiler.__main__:main',
        ],
    },
)
