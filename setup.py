from setuptools import setup, find_packages

setup(
    name='ComposeVis',
    version='0.1.0',
    description='Composable sky models and visibility evaluation for radio interferometry',
    author='Joshiwavm',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'numpy',
        'scipy',
        'astropy',
        'pyyaml',
        'jax',
        'jax-finufft',
    ],
    extras_require={
        'test': ['pytest'],
    },
    package_data={'ComposeVis.model': ['models.yml']},
    include_package_data=True,
    python_requires='>=3.9',
)
