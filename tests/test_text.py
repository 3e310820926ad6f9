import os
import tempfile
import unittest

from docx_formatter.text import (
    LANGUAGE_CHECKS,
    build_proper_noun_table,
    find_proper_nouns,
    identify_code_language,
    load_proper_nouns,
    to_sentence_case,
)


class TestSentenceCase(unittest.TestCase):
    def test_folds_case(self):
        self.assertEqual(to_sentence_case("HELLO WORLD"), "Hello world")
        self.assertEqual(to_sentence_case("getting Started With The Tool"), "Getting started with the tool")

    def test_empty(self):
        self.assertEqual(to_sentence_case(""), "")

    def test_each_sentence_capitalized_and_rejoined_with_single_space(self):
        self.assertEqual(to_sentence_case("one thing.   TWO things!\nthree?"), "One thing. Two things! Three?")

    def test_restores_known_proper_nouns(self):
        self.assertEqual(to_sentence_case("meeting on MONDAY with GOOGLE"), "Meeting on Monday with Google")
        self.assertEqual(to_sentence_case("this is the API. it WORKS"), "This is the API. It works")
        self.assertEqual(to_sentence_case("learn node.js today"), "Learn Node.js today")
        self.assertEqual(to_sentence_case("c# and python"), "C# and Python")

    def test_trailing_punctuation_is_ignored_for_lookup(self):
        self.assertEqual(to_sentence_case("we love github, really"), "We love GitHub, really")

    def test_capitalized_first_word_is_restored_across_the_sentence(self):
        self.assertEqual(to_sentence_case("THE BEST OF THE BEST"), "The best of The best")
        self.assertEqual(to_sentence_case("the cat and the dog"), "The cat and The dog")
        self.assertEqual(to_sentence_case("go. the end of the road"), "Go. The end of The road")

    def test_find_proper_nouns(self):
        found = find_proper_nouns("The api is on github.")
        self.assertEqual(found, ["The", "API", "GitHub"])

    def test_custom_table(self):
        table = build_proper_noun_table(["FastAPI"])
        self.assertEqual(to_sentence_case("WE USE FASTAPI and google", table), "We use FastAPI and google")

    def test_load_proper_nouns_extends_defaults(self):
        with tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False, encoding="utf-8") as tmp:
            tmp.write("# extra nouns\nKubernetes\n\n")
            path = tmp.name
        try:
            table = load_proper_nouns(path)
        finally:
            os.remove(path)
        self.assertEqual(table["kubernetes"], "Kubernetes")
        self.assertEqual(table["json"], "JSON")
        self.assertEqual(to_sentence_case("deploy to kubernetes", table), "Deploy to Kubernetes")

    def test_idempotent(self):
        samples = [
            "HELLO WORLD. this IS a test!",
            "the quick Brown fox jumps",
            "Working with the API and JSON",
            "what? why. how!",
            "THE BEST OF THE BEST",
        ]
        for sample in samples:
            once = to_sentence_case(sample)
            self.assertEqual(to_sentence_case(once), once, sample)


class TestIdentifyCodeLanguage(unittest.TestCase):
    CASES = [
        ("import React from 'react';", "jsx"),
        ("const [count, setCount] = useState(0);", "jsx"),
        ("package main\n\nfunc main() {}", "go"),
        ("import os\n\ndef main():\n    pass", "python"),
        ("def greet():\n    print('hi')", "python"),
        ("const add = (a, b) => a + b;", "javascript"),
        ("let x = 1;\nfunction f() { return x; }", "javascript"),
        ("interface User { name: string }", "typescript"),
        ("class Point:\n    pass", "typescript"),
        ("public class Main { }", "java"),
        ("private int count;", "java"),
        ("#include <stdio.h>", "c"),
        ("int main() { return 0; }", "c"),
        ("using namespace foo", "cpp"),
        ("std::cout << 1", "cpp"),
        ("<?php echo 1;", "php"),
        ("<!DOCTYPE html>\n<html></html>", "html"),
        ("body { color: red; }", "css"),
        ("@media print { }", "css"),
        ("just some words", "plain"),
        ("", "plain"),
    ]

    def test_table(self):
        for code, expected in self.CASES:
            with self.subTest(code=code):
                self.assertEqual(identify_code_language(code), expected)

    def test_fixed_order(self):
        order = [name for name, _check in LANGUAGE_CHECKS]
        self.assertEqual(
            order,
            ["jsx", "go", "python", "javascript", "typescript", "java", "c", "cpp", "php", "html", "css"],
        )

    def test_c_check_precedes_cpp(self):
        snippet = "int main() { std::cout << 1; }"
        self.assertEqual(identify_code_language(snippet), "c")

    def test_typescript_with_const_resolves_to_javascript(self):
        snippet = "const x: number = 1;\nfunction f(): void {}"
        self.assertEqual(identify_code_language(snippet), "javascript")

    def test_pure(self):
        snippet = "def f():\n    print(1)"
        self.assertEqual(identify_code_language(snippet), identify_code_language(snippet))


if __name__ == "__main__":
    unittest.main()
