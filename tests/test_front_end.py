import io
import unittest

from loxscript import syntax
from loxscript.diagnostics import Report
from loxscript.front_end import parse_text, scan_text

def _quiet():
	return Report(err=io.StringIO())

class ScannerTests(unittest.TestCase):

	def kinds(self, text):
		report = _quiet()
		tokens = scan_text(text, report)
		assert report.ok(), report.issues
		return [t.kind for t in tokens]

	def test_punctuation(self):
		self.assertEqual(
			["(", ")", "{", "}", ",", ".", "-", "+", ";", "*", "/", "!", "!=", "=", "==", "<", "<=", ">", ">=", "EOF"],
			self.kinds("(){},.-+;*/ ! != = == < <= > >="),
		)

	def test_words(self):
		self.assertEqual(["CLASS", "name", "FUN", "name", "EOF"], self.kinds("class Foo fun _bar9"))

	def test_literals(self):
		report = _quiet()
		tokens = scan_text('12 3.5 "hi there" 4.', report)
		self.assertEqual([12.0, 3.5, "hi there", 4.0, None], [t.literal for t in tokens[:5]])
		self.assertEqual(".", tokens[4].kind)

	def test_comments_and_lines(self):
		report = _quiet()
		tokens = scan_text('// nothing\n/* still\nnothing */ a\n"two\nlines" b', report)
		self.assertEqual(["name", "string", "name", "EOF"], [t.kind for t in tokens])
		self.assertEqual(3, tokens[0].line)
		self.assertEqual(5, tokens[2].line)

	def test_unclosed_block_comment_runs_to_the_end(self):
		report = _quiet()
		tokens = scan_text("a /* never\nclosed", report)
		self.assertTrue(report.ok())
		self.assertEqual(["name", "EOF"], [t.kind for t in tokens])

	def test_lexical_errors_continue(self):
		report = _quiet()
		tokens = scan_text('a @ b # "oops', report)
		self.assertEqual(3, len(report.issues))
		self.assertEqual(["name", "name", "EOF"], [t.kind for t in tokens])
		self.assertEqual("[line 1] Error: Unexpected character '@'.", report.issues[0].headline())
		self.assertEqual("Unterminated string.", report.issues[2].message)

class ParserTests(unittest.TestCase):

	def parse(self, text):
		report = _quiet()
		statements = parse_text(text, report)
		assert report.ok(), [i.headline() for i in report.issues]
		return statements

	def test_precedence(self):
		stmt, = self.parse("1 + 2 * 3 == 7 and !false;")
		self.assertIsInstance(stmt, syntax.ExpressionStmt)
		self.assertEqual("(((<Literal 1.0> + (<Literal 2.0> * <Literal 3.0>)) == <Literal 7.0>) and (!<Literal False>))", str(stmt.expr))

	def test_assignment_targets(self):
		a, b = self.parse("a = b = 1; x.y.z = 2;")
		self.assertIsInstance(a.expr, syntax.Assign)
		self.assertIsInstance(a.expr.value, syntax.Assign)
		self.assertIsInstance(b.expr, syntax.Set)
		self.assertEqual("z", b.expr.name.lexeme)
		self.assertIsInstance(b.expr.obj, syntax.Get)

	def test_class(self):
		stmt, = self.parse("class B < A { init(x) { this.x = x; } go() { return super.go(); } }")
		self.assertIsInstance(stmt, syntax.Class)
		self.assertEqual("A", stmt.superclass.name.lexeme)
		self.assertEqual(["init", "go"], [m.name.lexeme for m in stmt.methods])
		self.assertEqual(["x"], [p.lexeme for p in stmt.methods[0].params])

	def test_for_desugars_to_while(self):
		stmt, = self.parse("for (var i = 0; i < 3; i = i + 1) print i;")
		self.assertIsInstance(stmt, syntax.Block)
		init, loop = stmt.statements
		self.assertIsInstance(init, syntax.Var)
		self.assertIsInstance(loop, syntax.While)
		body, increment = loop.body.statements
		self.assertIsInstance(body, syntax.Print)
		self.assertIsInstance(increment.expr, syntax.Assign)

	def test_bare_for(self):
		stmt, = self.parse("for (;;) {}")
		self.assertIsInstance(stmt, syntax.While)
		self.assertIs(True, stmt.cond.value)

	def test_if_else_and_return(self):
		stmt, = self.parse("fun f(a, b) { if (a) return; else return b; }")
		self.assertIsInstance(stmt, syntax.Function)
		branch, = stmt.body
		self.assertIsNone(branch.then.value)
		self.assertIsInstance(branch.otherwise.value, syntax.Variable)

	def test_errors_recover(self):
		report = _quiet()
		statements = parse_text("var = 1; print 2; 1 + ; print 3;", report)
		self.assertEqual(2, len(report.issues))
		self.assertEqual("[line 1] Error at '=': Expect variable name.", report.issues[0].headline())
		self.assertEqual(2, len(statements))

	def test_invalid_assignment_target(self):
		report = _quiet()
		parse_text("1 + 2 = 3;", report)
		self.assertEqual(["Invalid assignment target."], [i.message for i in report.issues])

	def test_error_at_end(self):
		report = _quiet()
		parse_text("print 1", report)
		self.assertEqual("[line 1] Error at end: Expect ';' after value.", report.issues[0].headline())

	def test_too_many_arguments(self):
		report = _quiet()
		parse_text("f(%s);" % ", ".join(["1"] * 256), report)
		self.assertEqual(["Can't have more than 255 arguments."], [i.message for i in report.issues])

	def test_too_many_parameters(self):
		report = _quiet()
		names = ["p%d" % i for i in range(257)]
		parse_text("fun f(%s) {}" % ", ".join(names), report)
		self.assertEqual(
			["[line 1] Error at 'p255': Can't have more than 255 parameters.", "[line 1] Error at 'p256': Can't have more than 255 parameters."],
			[i.headline() for i in report.issues],
		)

	def diagnose(self, text):
		report = _quiet()
		parse_text(text, report)
		self.assertTrue(report.issues, text)
		return report.issues[0].headline()

	def test_messages_follow_the_construct(self):
		self.assertEqual("[line 1] Error at 'print': Expect ')' after if condition.", self.diagnose("if (a print 1;"))
		self.assertEqual("[line 1] Error at ';': Expect ')' after expression.", self.diagnose("print (1;"))
		self.assertEqual("[line 1] Error at '{': Expect superclass name.", self.diagnose("class A < {}"))
		self.assertEqual("[line 1] Error at '(': Expect function name.", self.diagnose("fun () {}"))
		self.assertEqual("[line 1] Error at ';': Expect expression.", self.diagnose("print 1 + ;"))

	def test_unclosed_braces(self):
		self.assertEqual("[line 1] Error at end: Expect '}' after block.", self.diagnose("{ print 1;"))
		self.assertEqual("[line 2] Error at end: Expect '}' after class body.", self.diagnose("class A {\n"))

if __name__ == '__main__':
	unittest.main()
