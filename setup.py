from setuptools import setup

setup(
    name='printtree',
    packages=["printtree"],
    version='0.3',
    python_requires='>=3.8',
    description='Print any tree-shaped value as an indented diagram, including numpy arrays, tensors and tensor trees.',
    author='Johannes Villmow',
    author_email='johannes.villmow@hs-rm.de',
    license='MIT',
    install_requires=[
        "numpy",
        "torch",
    ],
    extras_require={
        "test": ["pytest"],
    },
    keywords=['tree', 'print tree', 'pretty print', 'tensor tree'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
)
