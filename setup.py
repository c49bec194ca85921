import setuptools

import avl_itree

setuptools.setup(
    name="avl-itree",
    version=avl_itree.__version__,
    author="mephi42",
    author_email="mephi42@gmail.com",
    description="Augmented AVL tree for interval overlap queries",
    packages=setuptools.find_packages(exclude=("test",)),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "click",
    ],
    extras_require={
        "test": [
            "sortedcontainers",
        ],
    },
    entry_points={
        "console_scripts": [
            "avl-itree=avl_itree.cli:main",
        ],
    },
)
