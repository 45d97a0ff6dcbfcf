"""Example strings for YANG pattern restrictions

A YANG pattern (an XML Schema regular expression) is translated to a
nondeterministic finite automaton.  The automaton is searched breadth
first, which yields the shortest accepted string, and among those the
lexicographically smallest.  The result is checked against the original
pattern with lxml before it is handed out.
"""

import bisect
import collections
import logging
import re
from io import StringIO
from xml.sax.saxutils import escape, quoteattr
# re._parser and re._constants are private; their layout is CPython's
# from 3.11 on
from re import _constants as sre_constants
from re import _parser as sre_parse

import lxml.etree

from .error import PatternError

log = logging.getLogger(__name__)

MAX_CHAR = 0x10FFFF

MAX_STATES = 20000
"""Upper limit on automaton states, both NFA and explored DFA states."""

MAX_OPTIONAL = 16
"""Optional repetitions beyond the minimum never shorten an accepted
string, so bounded repetitions are truncated to this many."""

VISIBLE_CHARS = [(0x21, 0x7E)]
XML_CHARS = [(0x9, 0xA), (0xD, 0xD), (0x20, 0xD7FF), (0xE000, 0xFFFD),
             (0x10000, MAX_CHAR)]
ALPHABETS = (VISIBLE_CHARS, XML_CHARS)
"""Alphabets tried in turn when looking for an example."""

class_bodies = {
    "d": "0-9",
    "s": " \\t\\n\\f\\r",
    "w": "a-zA-Z_0-9",
    "i": "_:a-zA-Z",
    "c": "\\-._:a-zA-Z0-9",
    }
"""Explicit character sets for the multi-character escapes."""

DIGIT_CHARS = [(0x30, 0x39)]
SPACE_CHARS = [(0x9, 0xA), (0xC, 0xD), (0x20, 0x20)]
WORD_CHARS = [(0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)]

def example_for(pattern):
    """Return the shortest string matching `pattern`, or None.

    Failure to build an automaton is logged, never raised.
    """
    try:
        regex = translate(pattern)
        automaton = Automaton.from_regex(regex)
        example = None
        for alphabet in ALPHABETS:
            example = automaton.shortest_example(alphabet)
            if example is not None:
                break
    except (PatternError, re.error, RecursionError) as ex:
        log.warning("cannot create example string for pattern %s: %s",
                    pattern, ex)
        return None
    if example is None:
        log.warning("pattern %s does not accept any string", pattern)
        return None
    if not matches(pattern, example):
        log.warning("example %r does not match pattern %s", example, pattern)
        return None
    return example

def translate(pattern):
    """Translate the XML Schema regular expression `pattern` to a Python
    regular expression.

    The multi-character escapes become explicit character sets, and
    '^' and '$', which are ordinary characters in XML Schema, are
    escaped.
    """
    res = []
    in_class = False
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\" and i + 1 < len(pattern):
            e = pattern[i + 1]
            i += 2
            if e in class_bodies:
                if in_class:
                    res.append(class_bodies[e])
                else:
                    res.append("[%s]" % class_bodies[e])
            elif e.lower() in class_bodies and not in_class:
                res.append("[^%s]" % class_bodies[e.lower()])
            else:
                res.append(c + e)
            continue
        i += 1
        if in_class:
            if c == "]":
                in_class = False
            res.append(c)
        elif c == "[":
            in_class = True
            res.append(c)
            # a leading '^' and ']' belong to the set
            if pattern.startswith("^", i):
                res.append("^")
                i += 1
            if pattern.startswith("]", i):
                res.append("\\]")
                i += 1
        elif c in "^$":
            res.append("\\" + c)
        else:
            res.append(c)
    return "".join(res)

def matches(pattern, value):
    """Check `value` against the XML Schema `pattern` with lxml."""
    doc = StringIO(
        '<xsd:schema xmlns:xsd="http://www.w3.org/2001/XMLSchema">' \
        '  <xsd:element name="a" type="x"/>' \
        '    <xsd:simpleType name="x">' \
        '      <xsd:restriction base="xsd:string">' \
        '        <xsd:pattern value=%s/>' \
        '      </xsd:restriction>' \
        '     </xsd:simpleType>' \
        '   </xsd:schema>' % quoteattr(pattern))
    try:
        sch = lxml.etree.XMLSchema(lxml.etree.parse(doc))
    except (lxml.etree.XMLSchemaParseError, lxml.etree.XMLSyntaxError):
        return False
    text = escape(value, {"\t": "&#9;", "\n": "&#10;", "\r": "&#13;"})
    return sch.validate(lxml.etree.parse(StringIO("<a>%s</a>" % text)))

### character sets, as sorted lists of inclusive (lo, hi) code points

def normalize(ranges):
    res = []
    for (lo, hi) in sorted(ranges):
        if res and lo <= res[-1][1] + 1:
            if hi > res[-1][1]:
                res[-1] = (res[-1][0], hi)
        else:
            res.append((lo, hi))
    return res

def negate(ranges):
    res = []
    nxt = 0
    for (lo, hi) in normalize(ranges):
        if lo > nxt:
            res.append((nxt, lo - 1))
        nxt = hi + 1
    if nxt <= MAX_CHAR:
        res.append((nxt, MAX_CHAR))
    return res

def contains(ranges, c):
    i = bisect.bisect_right(ranges, (c, MAX_CHAR + 1)) - 1
    return i >= 0 and ranges[i][0] <= c <= ranges[i][1]

def set_ranges(items):
    """Return the character set of an sre 'IN' item list."""
    ranges = []
    negated = False
    for (op, av) in items:
        if op == sre_constants.NEGATE:
            negated = True
        elif op == sre_constants.LITERAL:
            ranges.append((av, av))
        elif op == sre_constants.RANGE:
            ranges.append(av)
        elif op == sre_constants.CATEGORY:
            ranges.extend(category_ranges(av))
        else:
            raise PatternError("unsupported set member %s" % op)
    ranges = normalize(ranges)
    if negated:
        return negate(ranges)
    return ranges

categories = {
    sre_constants.CATEGORY_DIGIT: DIGIT_CHARS,
    sre_constants.CATEGORY_NOT_DIGIT: negate(DIGIT_CHARS),
    sre_constants.CATEGORY_SPACE: SPACE_CHARS,
    sre_constants.CATEGORY_NOT_SPACE: negate(SPACE_CHARS),
    sre_constants.CATEGORY_WORD: WORD_CHARS,
    sre_constants.CATEGORY_NOT_WORD: negate(WORD_CHARS),
    }
"""The sre categories \\d, \\s and \\w (and negations) in their ASCII
form."""

def category_ranges(category):
    try:
        return categories[category]
    except KeyError:
        raise PatternError("unsupported character category %s" % category)

class Automaton(object):
    """Nondeterministic finite automaton over character sets."""

    def __init__(self):
        self.moves = []
        """list of (ranges, target) per state"""
        self.epsilon = []
        """list of targets per state"""
        self.start = self.new_state()
        self.accept = self.new_state()

    @classmethod
    def from_regex(cls, regex):
        automaton = cls()
        automaton.build(sre_parse.parse(regex), automaton.start,
                        automaton.accept)
        return automaton

    def new_state(self):
        if len(self.moves) >= MAX_STATES:
            raise PatternError("pattern is too complex")
        self.moves.append([])
        self.epsilon.append([])
        return len(self.moves) - 1

    def build(self, items, start, end):
        """Connect `start` to `end` through the sequence `items`."""
        cur = start
        for (op, av) in items:
            nxt = self.new_state()
            self.build_item(op, av, cur, nxt)
            cur = nxt
        self.epsilon[cur].append(end)

    def build_item(self, op, av, start, end):
        if op == sre_constants.LITERAL:
            self.moves[start].append(([(av, av)], end))
        elif op == sre_constants.NOT_LITERAL:
            self.moves[start].append((negate([(av, av)]), end))
        elif op == sre_constants.ANY:
            self.moves[start].append((negate([(0xA, 0xA)]), end))
        elif op == sre_constants.IN:
            self.moves[start].append((set_ranges(av), end))
        elif op == sre_constants.SUBPATTERN:
            self.build(av[-1], start, end)
        elif op == sre_constants.BRANCH:
            for alt in av[1]:
                self.build(alt, start, end)
        elif op in (sre_constants.MAX_REPEAT, sre_constants.MIN_REPEAT):
            self.build_repeat(av, start, end)
        else:
            raise PatternError("unsupported construct %s" % op)

    def build_repeat(self, av, start, end):
        (lo, hi, item) = av
        cur = start
        for _i in range(lo):
            nxt = self.new_state()
            self.build(item, cur, nxt)
            cur = nxt
        if hi == sre_constants.MAXREPEAT:
            loop = self.new_state()
            self.epsilon[cur].append(loop)
            self.build(item, loop, loop)
            self.epsilon[loop].append(end)
            return
        for _i in range(min(hi - lo, MAX_OPTIONAL)):
            self.epsilon[cur].append(end)
            nxt = self.new_state()
            self.build(item, cur, nxt)
            cur = nxt
        self.epsilon[cur].append(end)

    def closure(self, states):
        res = set(states)
        stack = list(states)
        while stack:
            for t in self.epsilon[stack.pop()]:
                if t not in res:
                    res.add(t)
                    stack.append(t)
        return frozenset(res)

    def steps(self, states, alphabet):
        """Return the (char, states) transitions out of `states`, by
        ascending char.  One char represents each set of chars that lead
        to the same states."""
        moves = [m for s in states for m in self.moves[s]]
        bounds = set()
        for (ranges, _t) in moves + [(alphabet, None)]:
            for (lo, hi) in ranges:
                bounds.add(lo)
                bounds.add(hi + 1)
        res = []
        for c in sorted(bounds):
            if not contains(alphabet, c):
                continue
            targets = [t for (ranges, t) in moves if contains(ranges, c)]
            if targets:
                res.append((chr(c), self.closure(targets)))
        return res

    def shortest_example(self, alphabet=XML_CHARS):
        """Return the shortest accepted string over `alphabet`, or None if
        no string is accepted."""
        start = self.closure([self.start])
        paths = {start: ""}
        queue = collections.deque([start])
        while queue:
            states = queue.popleft()
            if self.accept in states:
                return paths[states]
            for (c, target) in self.steps(states, alphabet):
                if target not in paths:
                    if len(paths) >= MAX_STATES:
                        raise PatternError("pattern is too complex")
                    paths[target] = paths[states] + c
                    queue.append(target)
        return None
