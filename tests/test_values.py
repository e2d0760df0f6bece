import unittest

from loxscript import syntax
from loxscript.environment import Environment
from loxscript.ontology import Token
from loxscript.tree_walker.types import UndefinedProperty, LoxCallable
from loxscript.tree_walker.values import (
	EngineFunction, ClassDeclaration, ClassInstance, NativeFunction,
	stringify, is_equal, is_truthy,
)

def name(text): return Token("name", text, None, 1)

def _method(text, *params):
	return syntax.Function(name(text), [name(p) for p in params], [])

class StringifyTests(unittest.TestCase):

	def test_numbers(self):
		self.assertEqual("3", stringify(3.0))
		self.assertEqual("3.5", stringify(3.5))
		self.assertEqual("-2", stringify(-2.0))
		self.assertEqual("0.1", stringify(0.1))

	def test_big_whole_numbers_have_no_exponent(self):
		self.assertEqual("100000000000000000000", stringify(1e20))
		self.assertEqual("-9007199254740992", stringify(-9007199254740992.0))
		self.assertEqual("1e+21", stringify(1e21))
		self.assertEqual("1.5e-07", stringify(1.5e-7))

	def test_special_floats(self):
		self.assertEqual("Infinity", stringify(float("inf")))
		self.assertEqual("-Infinity", stringify(float("-inf")))
		self.assertEqual("NaN", stringify(float("nan")))
		self.assertEqual("-0", stringify(-0.0))

	def test_others(self):
		self.assertEqual("nil", stringify(None))
		self.assertEqual("true", stringify(True))
		self.assertEqual("false", stringify(False))
		self.assertEqual("verbatim", stringify("verbatim"))

class EqualityTests(unittest.TestCase):

	def test_nil(self):
		self.assertTrue(is_equal(None, None))
		self.assertFalse(is_equal(None, False))
		self.assertFalse(is_equal(0.0, None))

	def test_no_cross_type_equality(self):
		self.assertFalse(is_equal(True, 1.0))
		self.assertFalse(is_equal(0.0, False))
		self.assertFalse(is_equal("1", 1.0))
		self.assertTrue(is_equal("a", "a"))
		self.assertTrue(is_equal(2.0, 2.0))

	def test_truthiness(self):
		self.assertEqual([False, False, True, True, True], list(map(is_truthy, [None, False, True, 0.0, ""])))

class ClassModelTests(unittest.TestCase):

	def setUp(self) -> None:
		env = Environment()
		self.base = ClassDeclaration("Base", None, {
			"init": EngineFunction(_method("init", "a", "b"), env, True),
			"shared": EngineFunction(_method("shared"), env, False),
		})
		self.derived = ClassDeclaration("Derived", self.base, {
			"shared": EngineFunction(_method("shared", "x"), env, False),
		})

	def test_callable_capability(self):
		for it in (self.base, self.base.find_method("shared"), NativeFunction("f", 0, lambda: None)):
			self.assertIsInstance(it, LoxCallable)

	def test_method_lookup_walks_superclass(self):
		self.assertIs(self.base.find_method("init"), self.derived.find_method("init"))
		self.assertEqual(1, self.derived.find_method("shared").arity())
		self.assertIsNone(self.derived.find_method("absent"))

	def test_class_arity_follows_constructor(self):
		self.assertEqual(2, self.base.arity())
		self.assertEqual(2, self.derived.arity())
		self.assertEqual(0, ClassDeclaration("Empty", None, {}).arity())

	def test_bind_makes_a_new_function(self):
		method = self.base.find_method("shared")
		instance = ClassInstance(self.base)
		bound = method.bind(instance)
		self.assertIsNot(method, bound)
		self.assertEqual("<fn shared>", str(bound))
		self.assertIs(instance, bound._closure.get_at(0, "this"))
		self.assertNotIn("this", method._closure)

	def test_instance_fields(self):
		instance = ClassInstance(self.derived)
		self.assertIsInstance(instance.get(name("shared")), EngineFunction)
		instance.set(name("shared"), 4.0)
		self.assertEqual(4.0, instance.get(name("shared")))
		with self.assertRaises(UndefinedProperty):
			instance.get(name("missing"))
		self.assertEqual("instance of Derived", str(instance))

if __name__ == '__main__':
	unittest.main()
