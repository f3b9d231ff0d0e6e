from setuptools import setup, find_namespace_packages

setup(
    name='jhsiao-prefixwriter',
    version='0.0.1',
    author='Jason Hsiao',
    author_email='oaishnosaj@gmail.com',
    description='Prefix every line written to a byte stream',
    packages=find_namespace_packages(include=['jhsiao', 'jhsiao.*']),
    python_requires='>=3.6',
    extras_require={'test': ['pytest']},
)
