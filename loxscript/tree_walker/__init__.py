"""
The tree-walking run-time: values, the evaluator, and the executive that drives them.
"""
