from setuptools import setup, find_packages
import linkdriver


with open('readme.rst') as f:
    long_description = f.read()


setup(
    name='linkdriver',
    description="A command line driver for native linkers implemented in pure Python",
    long_description=long_description,
    version=linkdriver.__version__,
    include_package_data=True,
    packages=find_packages(exclude=["*.test.*", "test"]),
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'linkdriver-ld = linkdriver.cli.ld:ld',
        ]
    },
    license='BSD',
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Build Tools',
        'Topic :: Software Development :: Compilers',
    ]
)
