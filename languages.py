import re
from dataclasses import dataclass
from typing import FrozenSet, Optional, Pattern

from lexical_types import Language


# --- Shared Patterns ---
whitespace_re = re.compile(r'\s+')
identifier_re = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')
# Unterminated strings run to the end of input
string_re = re.compile(r'"(?:[^"\\]|\\[\s\S])*(?:"|\\?\Z)')
char_re = re.compile(r"'(?:[^'\\]|\\.)'")
number_re = re.compile(
    r'0[xX][0-9a-fA-F]+(?P<hex_suffix>[uUlL]*)'
    r'|(?P<float>(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[0-9]+[eE][+-]?[0-9]+)(?P<float_suffix>[fFdD]?)'
    r'|[0-9]+(?P<real_suffix>[fFdD])'
    r'|[0-9]+(?P<int_suffix>[uUlL]*)'
)
block_comment_re = re.compile(r'/\*[\s\S]*?(?:\*/|\Z)')
line_comment_re = re.compile(r'//[^\n]*')
preprocessor_re = re.compile(r'#[^\n]*')

# Longest first; single characters are tried afterwards
MULTI_CHAR_OPERATORS = (
    '>>>=', '>>>', '<<=', '>>=', '->', '::', '++', '--', '==', '!=', '>=', '<=',
    '&&', '||', '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '<<', '>>',
)
SINGLE_CHAR_OPERATORS = frozenset('+-*/%=<>!&|^~?.,')
PUNCTUATION = frozenset(';{}()[]:')

# Tokens that end any open generic/template argument list
ANGLE_RESET_TEXTS = frozenset({';', '{', '}', '(', ')', '&&', '||', '='})

TAC_OPERATORS = frozenset({'+', '-', '*', '/', '==', '!=', '<', '>', '<=', '>='})
RELATIONAL_OPERATORS = frozenset({'==', '!=', '<', '>', '<=', '>='})


# --- Language Definitions ---
@dataclass(frozen=True)
class LanguageGrammar:
    language: Language
    keywords: FrozenSet[str]
    type_keywords: FrozenSet[str]
    modifiers: FrozenSet[str]
    scope_keywords: FrozenSet[str]
    control_keywords: FrozenSet[str]
    null_literals: FrozenSet[str]
    # Keywords that may take template/generic arguments, e.g. vector<int>
    generic_keywords: FrozenSet[str]
    # The subset of generic_keywords that name a type once instantiated
    container_keywords: FrozenSet[str]
    block_comment: Pattern
    line_comment: Pattern
    preprocessor: Optional[Pattern] = None
    pointer_declarators: bool = False


java_keywords = frozenset({
    'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch', 'char', 'class', 'const',
    'continue', 'default', 'do', 'double', 'else', 'enum', 'extends', 'final', 'finally', 'float',
    'for', 'goto', 'if', 'implements', 'import', 'instanceof', 'int', 'interface', 'long', 'native',
    'new', 'package', 'private', 'protected', 'public', 'return', 'short', 'static', 'strictfp',
    'super', 'switch', 'synchronized', 'this', 'throw', 'throws', 'transient', 'try', 'void',
    'volatile', 'while', 'true', 'false', 'null',
})

cpp_keywords = frozenset({
    'alignas', 'alignof', 'and', 'and_eq', 'asm', 'atomic_cancel', 'atomic_commit', 'atomic_noexcept',
    'auto', 'bitand', 'bitor', 'bool', 'break', 'case', 'catch', 'char', 'char8_t', 'char16_t',
    'char32_t', 'class', 'compl', 'concept', 'const', 'consteval', 'constexpr', 'constinit', 'const_cast',
    'continue', 'co_await', 'co_return', 'co_yield', 'decltype', 'default', 'delete', 'do', 'double',
    'dynamic_cast', 'else', 'enum', 'explicit', 'export', 'extern', 'false', 'float', 'for', 'friend',
    'goto', 'if', 'inline', 'int', 'long', 'mutable', 'namespace', 'new', 'noexcept', 'not', 'not_eq',
    'nullptr', 'operator', 'or', 'or_eq', 'private', 'protected', 'public', 'reflexpr', 'register',
    'reinterpret_cast', 'requires', 'return', 'short', 'signed', 'sizeof', 'static', 'static_assert',
    'static_cast', 'struct', 'switch', 'synchronized', 'template', 'this', 'thread_local', 'throw',
    'true', 'try', 'typedef', 'typeid', 'typename', 'union', 'unsigned', 'using', 'virtual', 'void',
    'volatile', 'wchar_t', 'while', 'xor', 'xor_eq',
    # library names treated as reserved words
    'string', 'vector', 'map', 'set', 'cout', 'cin', 'endl', 'std',
})

JAVA = LanguageGrammar(
    language=Language.JAVA,
    keywords=java_keywords,
    type_keywords=frozenset({'int', 'float', 'double', 'char', 'boolean', 'void', 'long', 'short', 'byte'}),
    modifiers=frozenset({
        'static', 'final', 'const', 'public', 'private', 'protected',
        'abstract', 'transient', 'volatile', 'synchronized', 'native', 'strictfp',
    }),
    scope_keywords=frozenset({'class', 'enum', 'interface'}),
    control_keywords=frozenset({
        'if', 'else', 'for', 'while', 'do', 'switch', 'try', 'catch', 'finally', 'synchronized',
    }),
    null_literals=frozenset({'null'}),
    generic_keywords=frozenset(),
    container_keywords=frozenset(),
    block_comment=block_comment_re,
    line_comment=line_comment_re,
)

CPP = LanguageGrammar(
    language=Language.CPP,
    keywords=cpp_keywords,
    type_keywords=frozenset({
        'int', 'float', 'double', 'char', 'bool', 'void', 'string', 'auto', 'long', 'short',
        'signed', 'unsigned', 'wchar_t', 'char8_t', 'char16_t', 'char32_t',
    }),
    modifiers=frozenset({
        'static', 'final', 'const', 'public', 'private', 'protected',
        'constexpr', 'constinit', 'consteval', 'extern', 'inline', 'mutable', 'register',
        'thread_local', 'virtual', 'volatile', 'explicit', 'friend',
    }),
    scope_keywords=frozenset({'class', 'struct', 'enum', 'union', 'namespace'}),
    control_keywords=frozenset({
        'if', 'else', 'for', 'while', 'do', 'switch', 'try', 'catch', 'synchronized',
    }),
    null_literals=frozenset({'nullptr'}),
    generic_keywords=frozenset({'vector', 'map', 'set', 'template', 'static_cast', 'dynamic_cast',
                                'const_cast', 'reinterpret_cast'}),
    container_keywords=frozenset({'vector', 'map', 'set'}),
    block_comment=block_comment_re,
    line_comment=line_comment_re,
    preprocessor=preprocessor_re,
    pointer_declarators=True,
)

GRAMMARS = {Language.JAVA: JAVA, Language.CPP: CPP}


def get_grammar(language):
    return GRAMMARS[Language.parse(language)]


# --- Sample Programs ---
SAMPLE_CODE = {
    Language.JAVA: '''/**
 * Sample Java class to demonstrate the lexer.
 */
package com.example;

import java.util.ArrayList;
import java.util.List;

public class SampleJava {
    private static final int MAX_COUNT = 100; // Max items
    private String message = "Hello, World!"; // Greeting message

    public static void main(String[] args) {
        System.out.println("Starting analysis...");
        SampleJava sample = new SampleJava();
        int result = sample.calculateSum(10, 20);
        System.out.println("Sum: " + result);

        // Example of a loop
        for (int i = 0; i < 5; i++) {
            System.out.println("Count: " + i);
            if (i == 3) {
                break; // Exit loop early
            }
        }

        // Check boolean and null
        boolean flag = true;
        String data = null;
        if (flag && data == null) {
            System.out.println("Conditions met.");
        }

        char grade = 'A'; // Character literal
        double pi = 3.14159;

        System.out.println("Analysis complete.");
    }

    /**
     * Calculates the sum of two integers.
     */
    public int calculateSum(int a, int b) {
        int sum = a + b;
        // An invalid token example: @
        return sum;
    }

    // Method with list
    public List<String> getItems() {
      ArrayList<String> items = new ArrayList<>();
      items.add("Apple");
      items.add("Banana");
      return items;
    }
}
/* Multi-line
   comment example */
''',
    Language.CPP: '''/*
 * Sample C++ code for the lexer.
 */
#include <iostream>
#include <vector>
#include <string>

// Define a namespace
namespace SampleNS {
    const double PI = 3.14159;
}

using namespace std;

// A simple struct
struct Point {
    int x;
    int y;
};

// Function declaration
int add(int a, int b);

int main() {
    cout << "C++ Lexer Sample" << endl;

    int number = 42;
    float value = 12.5f;
    string text = "Sample Text";

    cout << "PI: " << SampleNS::PI << endl;

    // Pointers and references
    int* ptr = &number;
    int& ref = number;
    cout << "Pointer value: " << *ptr << endl;

    if (number > 10 && text.length() > 0) {
        cout << "Condition is true" << endl;
    } else {
        cout << "Condition is false" << endl;
    }

    vector<int> numbers = {1, 2, 3, 4, 5};
    for (int n : numbers) {
        cout << "Vector element: " << n << endl;
    }

    Point p = {10, 20};
    cout << "Point: (" << p.x << ", " << p.y << ")" << endl;

    int sum = add(5, 7);
    cout << "Sum from function: " << sum << endl;

    // Invalid token example: @invalidSymbol

    return 0;
}

// Function definition
int add(int a, int b) {
    return a + b;
}
''',
}


def get_sample(language):
    return SAMPLE_CODE[Language.parse(language)]
