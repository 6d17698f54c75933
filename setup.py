from setuptools import setup, find_packages
import re

with open('requirements.txt', encoding='utf-8') as f:
    requirements = f.read().splitlines()

setup(
    name="redisrw",
    author='Zhang Jianhao',
    author_email='heeroz@gmail.com',
    description='读写分离的Redis访问层：写走主库，读走从库，写后优先读主库',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    license='Apache 2.0',
    keywords='redis valkey replica master slave read write splitting connection pool',
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
    install_requires=requirements,
    extras_require={
        'test': ['pytest', 'docker'],
    },

    version=re.findall(r"^__version__ = \"([^']+)\"\r?$",
                       open('redisrw/__version__.py', encoding='utf-8').read(), re.M)[0],
    packages=find_packages(include=['redisrw', 'redisrw.*']),
    entry_points={"console_scripts": "redisrw=redisrw.__main__:main"}
)
