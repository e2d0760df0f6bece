"""
A tree-walking interpreter for the Lox scripting language:
scanner, parser, static resolver, and evaluator.
"""
