from setuptools import setup, find_packages

setup(
    name='fib-repl',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'PyYAML>=6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'fib-repl=fib_repl.cli:main',
        ],
    },
    description='Interactive console calculator for Fibonacci numbers',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Intended Audience :: Education',
        'Environment :: Console',
    ],
    keywords='fibonacci repl recursion console',
    python_requires='>=3.8',
)
