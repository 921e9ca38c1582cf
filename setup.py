from setuptools import find_packages, setup


setup(
    name='listdep',
    version='0.1.0',
    description='list-based transition system for dependency parsing',
    license='MIT',
    python_requires='>=3.6',
    install_requires=[
        'numpy>=1.11.0',
        'dill',
        'python-dateutil',
        'progressbar2',
    ],
    packages=find_packages(exclude=['tests', 'tests.*']),
)
