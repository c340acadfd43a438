import os
from setuptools import setup, find_packages

# Function to read requirements from a file
def read_requirements(file_path):
    if not os.path.exists(file_path):
        return []
    with open(file_path, 'r') as f:
        return [
            line.strip()
            for line in f
            if line.strip() and not line.strip().startswith('#')
        ]

# Core dependencies
install_requires = read_requirements('requirements.txt')

# Development dependencies
dev_requires = read_requirements('dev-requirements.txt')

setup(
    name="gpsearch",
    version="1.0.0",
    description="Sequential model-based hyperparameter search with a Gaussian Process surrogate.",
    long_description=open('README.md', 'r', encoding='utf-8').read(),
    long_description_content_type="text/markdown",
    package_dir={'': 'src'},
    packages=find_packages(where='src', exclude=["tests", "docs"]),
    install_requires=install_requires,
    extras_require={
        'dev': dev_requires,
        'test': dev_requires,
    },
    classifiers=[
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    python_requires='>=3.8',
    include_package_data=True,
)
