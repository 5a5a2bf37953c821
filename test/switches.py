# python
"""
Switch definitions, switch table and token buffer behavioral tests.

Scope
- Validate the name specification grammar and the help display it produces.
- Validate SwitchTable registration (eviction), short and long resolution.
- Validate the ArgBuffer queue used by a single parse call.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optswitch import (
    OptionParser,
    SwitchDefinitionError,
    InvalidOptionError,
    AmbiguousOptionError,
    ValueDomain,
)
from optswitch.switches import (
    parse_names,
    Separator,
    NoArgSwitch,
    BoolSwitch,
    ArgSwitch,
    ListArgSwitch,
    ArgSwitchWithValues,
    OptArgSwitchWithValues,
)
from optswitch.table import SwitchTable
from optswitch.tokens import ArgBuffer, SwitchMatch


def identity(config):
    return config


class TestNameGrammar(TestCase):
    """Behavioral tests for short/long name specifications."""

    def testBothBlank(self):
        with self.assertRaises(SwitchDefinitionError) as context:
            parse_names("", "  ")
        self.assertEqual(context.exception.message, "Both long and short name specifications cannot be blank")

    def testMalformedShortNames(self):
        for short in ("a", "-ab", "-ab ARG", "- a"):
            with self.subTest(short=short), self.assertRaises(SwitchDefinitionError) as context:
                parse_names(short, "")
            self.assertTrue(context.exception.message.startswith("Invalid short name specification:"))

    def testMalformedLongNames(self):
        for long in ("name", "-name", "name ARG", "-name ARG", "name=ARG", "-name=ARG", "--no-name", "--", "--=ARG"):
            with self.subTest(long=long), self.assertRaises(SwitchDefinitionError) as context:
                parse_names("", long)
            self.assertTrue(context.exception.message.startswith("Invalid long name specification:"))

    def testReservedPrefixForBooleansToo(self):
        with self.assertRaises(SwitchDefinitionError):
            OptionParser().bool("", "--no-color")

    def testLongArgumentForms(self):
        for long, display in (
                ("--name ARG", "    --name ARG"),
                ("--name [ARG]", "    --name [ARG]"),
                ("--name=ARG", "    --name=ARG"),
                ("--name[=ARG]", "    --name[=ARG]"),
                ("--name=[ARG]", "    --name=[ARG]"),
        ):
            with self.subTest(long=long):
                names = parse_names("", long)
                self.assertEqual(names.long, "name")
                self.assertEqual(names.display, display)

    def testDisplays(self):
        for short, long, negatable, display in (
                ("-a", "", False, "-a"),
                ("-a ARG", "", False, "-a ARG"),
                ("", "--apple", False, "    --apple"),
                ("", "--apple", True, "    --[no-]apple"),
                ("-a", "--apple", False, "-a, --apple"),
                ("-a", "--apple", True, "-a, --[no-]apple"),
                ("-a ARG", "--apple", False, "-a, --apple ARG"),
                ("-a ARG", "--apple=VALUE", False, "-a, --apple=VALUE"),
                ("  -a  ", "  --apple  ", False, "-a, --apple"),
        ):
            with self.subTest(short=short, long=long):
                self.assertEqual(parse_names(short, long, negatable=negatable).display, display)

    def testNonAsciiShortName(self):
        names = parse_names("-é", "")
        self.assertEqual(names.short, "é")

    def testNegatedName(self):
        self.assertEqual(parse_names("", "--color").negated, "no-color")
        self.assertEqual(parse_names("-c", "").negated, "")

    def testParserValidatesBeforeDecorating(self):
        cli = OptionParser()
        with self.assertRaises(SwitchDefinitionError):
            cli.reqd("a", "")
        self.assertEqual(len(cli.switches), 0)

    def testDecoratorRequiresCallable(self):
        with self.assertRaises(TypeError):
            OptionParser().flag("-a", "")("not callable")

    def testDecoratorReturnsSwitch(self):
        cli = OptionParser()
        self.assertIsInstance(cli.flag("-a", "")(identity), NoArgSwitch)
        self.assertIsInstance(cli.bool("-b", "")(identity), BoolSwitch)
        self.assertIsInstance(cli.reqd("-c", "")(identity), ArgSwitch)
        self.assertIsInstance(cli.list("-d", "")(identity), ListArgSwitch)
        switch = cli.reqd("-e", "", values=["x", "y"])(identity)
        self.assertIsInstance(switch, ArgSwitchWithValues)
        self.assertEqual(switch.domain.names, ("x", "y"))
        self.assertIsInstance(cli.separator("Section"), Separator)
        self.assertEqual(repr(switch), "arg-switch-with-values(names='-e')")

    def testPrebuiltDomainIsShared(self):
        cli = OptionParser()
        domain = ValueDomain({"low": 1, "high": 9})
        required = cli.reqd("-p", "--priority ARG", values=domain)(lambda value, config: value)
        optional = cli.optl("-P", "--default-priority [ARG]", values=domain)(lambda value, config: value)
        self.assertIs(required.domain, domain)
        self.assertIs(optional.domain, domain)
        self.assertIsInstance(optional, OptArgSwitchWithValues)
        self.assertEqual(cli.parse(["-ph"], None), 9)
        self.assertEqual(cli.parse(["--default-priority=l"], None), 1)

    def testValuesSwitchTakesDomainAsIs(self):
        domain = ValueDomain(["x", "y"])
        switch = ArgSwitchWithValues(parse_names("-e", ""), (), domain, lambda value, config: value)
        self.assertIs(switch.domain, domain)
        self.assertEqual(switch.process("y", False, None, "-e y"), "y")


class TestSwitchTable(TestCase):
    """Behavioral tests for SwitchTable."""

    def setUp(self):
        self.table = SwitchTable()
        self.expert = self.table.register(NoArgSwitch(parse_names("-x", "--expert"), (), identity))
        self.text = self.table.register(NoArgSwitch(parse_names("-t", "--text"), (), identity))
        self.test = self.table.register(NoArgSwitch(parse_names("", "--test"), (), identity))
        self.quiet = self.table.register(BoolSwitch(parse_names("-q", "--quiet", negatable=True), (), identity))

    def testShortLookup(self):
        self.assertIs(self.table.find_by_short("x", "-x"), self.expert)
        with self.assertRaises(InvalidOptionError) as context:
            self.table.find_by_short("z", "-zap")
        self.assertEqual(context.exception.display, "-zap")

    def testLongLookupCarriesJoinedArgument(self):
        self.assertEqual(
            self.table.find_by_long("exp", "yes", "--exp=yes"),
            SwitchMatch(self.expert, True, "yes", False),
        )

    def testLongLookupNegated(self):
        self.assertEqual(
            self.table.find_by_long("no-q", None, "--no-q"),
            SwitchMatch(self.quiet, True, None, True),
        )

    def testAmbiguousLongLookup(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            self.table.find_by_long("te", None, "--te")
        self.assertEqual(context.exception.detail, "    (--text, --test)")

    def testUnknownLongLookup(self):
        with self.assertRaises(InvalidOptionError):
            self.table.find_by_long("verbose", None, "--verbose")

    def testEvictionOfTwoSwitches(self):
        replacement = self.table.register(NoArgSwitch(parse_names("-x", "--text"), (), identity))
        self.assertNotIn(self.expert, self.table)
        self.assertNotIn(self.text, self.table)
        self.assertEqual(list(self.table), [self.test, self.quiet, replacement])
        self.assertFalse(self.table.has_long("expert"))
        self.assertFalse(self.table.has_short("t"))

    def testSeparatorsAreNeverEvictedNorMatched(self):
        first = self.table.register(Separator(""))
        second = self.table.register(Separator(""))
        self.assertIn(first, self.table)
        self.assertIn(second, self.table)
        self.assertEqual(len(self.table), 6)
        with self.assertRaises(InvalidOptionError):
            self.table.find_by_short("", "-")

    def testEntriesKeepInsertionOrder(self):
        self.table.register(Separator("More:"))
        labels = [entry.label for entry in self.table.entries]
        self.assertEqual(labels, ["-x, --expert", "-t, --text", "    --test", "-q, --[no-]quiet", "More:"])


class TestArgBuffer(TestCase):
    """Behavioral tests for ArgBuffer."""

    def testQueueOperations(self):
        buffer = ArgBuffer(["a", "b"])
        self.assertEqual(buffer.peek(), "a")
        self.assertEqual(buffer.pop_front(), "a")
        buffer.push_front("-x")
        self.assertEqual(len(buffer), 2)
        self.assertEqual(buffer.drain(), ["-x", "b"])
        self.assertFalse(buffer)
        self.assertIsNone(buffer.peek())

    def testEmptyPop(self):
        with self.assertRaises(IndexError):
            ArgBuffer().pop_front()


if __name__ == "__main__":
    unittest.main()
