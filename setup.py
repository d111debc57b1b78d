#!/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

setup(
  name="tktree", version="0.2.0",
  python_requires=">=3.7",
  description="Declarative node-tree builder for Python, with tkinter to show the tree",
  long_description="""
tktree builds UI trees with curried constructors and configure callbacks: each call constructs an element,
configures it (nested calls build its children), attaches it to its parent and gives it back,
so your code represents the widget view tree directly. Trees are realized as tkinter widgets.
""",
  packages=find_packages(exclude=["tests", "tests.*"]),
  extras_require={"test": ["pytest>=7", "hypothesis>=6"]})
