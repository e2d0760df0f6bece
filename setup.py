"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "loxscript" / "Lox.md")

setuptools.setup(
	name='loxscript',
	version='0.1.0',
	packages=['loxscript', 'loxscript.tree_walker', ],
	package_data={
		'loxscript': ["Lox.md", "Lox.automaton"],
	},
	entry_points={
		'console_scripts': ["loxscript = loxscript.cmdline:main"],
	},
	license='MIT',
	description='A tree-walking interpreter for the Lox scripting language, with a static resolver pass',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		'test': ["pytest"],
	},
)
