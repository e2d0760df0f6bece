"""
Build the native namespace: the host functions every program can see.
"""
import time
from .tree_walker.evaluator import Interpreter

def clock() -> float:
	""" Milliseconds since the epoch, as a Lox number. """
	return float(time.time_ns() // 1_000_000)

NATIVES = [
	("clock", 0, clock),
]

def install_natives(interpreter:Interpreter):
	for name, arity, fn in NATIVES:
		interpreter.define_native(name, arity, fn)
