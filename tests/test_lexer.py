from __future__ import annotations

import unittest

from lined.lexer import Lexer, Token, tokenize


class LexerTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_positions: bool = False):
        if with_positions:
            return [(tok.kind, tok.text, tok.line, tok.column) for tok in tokenize(source)]
        return [(tok.kind, tok.text) for tok in tokenize(source)]

    def test_token_golden_multiline_program_positions(self) -> None:
        source = 'trim_line\ntruncate_by 12\ninsert "const KW_"\n'
        self.assertEqual(
            self._tokens(source, with_positions=True),
            [
                ("WORD", "trim_line", 1, 10),
                ("WORD", "truncate_by", 2, 12),
                ("INT", "12", 2, 15),
                ("WORD", "insert", 3, 7),
                ("STRING", "const KW_", 3, 18),
            ],
        )

    def test_stream_is_exhausted_after_last_token(self) -> None:
        lexer = tokenize("home")
        self.assertEqual(next(lexer), Token("WORD", "home", 1, 5))
        with self.assertRaises(StopIteration):
            next(lexer)
        with self.assertRaises(StopIteration):
            next(lexer)

    def test_tokens_are_produced_lazily(self) -> None:
        consumed: list[str] = []

        def chars():
            for ch in "home end":
                consumed.append(ch)
                yield ch

        lexer = Lexer(chars())
        self.assertEqual(next(lexer).text, "home")
        self.assertEqual("".join(consumed), "home ")

    def test_whitespace_kinds_separate_words(self) -> None:
        self.assertEqual(
            self._tokens("home\tend\r\nmark  copy"),
            [("WORD", "home"), ("WORD", "end"), ("WORD", "mark"), ("WORD", "copy")],
        )

    def test_integer_classification_uses_signed_32_bit_range(self) -> None:
        cases = [
            ("0", "INT"),
            ("42", "INT"),
            ("-7", "INT"),
            ("+7", "INT"),
            ("2147483647", "INT"),
            ("-2147483648", "INT"),
            ("2147483648", "WORD"),
            ("-2147483649", "WORD"),
            ("1_000", "WORD"),
            ("12ab", "WORD"),
            ("-", "WORD"),
            ("٣", "WORD"),
        ]
        for text, kind in cases:
            with self.subTest(text=text):
                self.assertEqual(self._tokens(text), [(kind, text)])

    def test_integer_token_value(self) -> None:
        (tok,) = list(tokenize("-12"))
        self.assertEqual(tok.value, -12)
        (word,) = list(tokenize("forward"))
        self.assertEqual(word.value, "forward")

    def test_quoted_string_keeps_whitespace_and_escapes(self) -> None:
        cases = [
            ('"a b\tc"', "a b\tc"),
            (r'"say \"hi\""', 'say "hi"'),
            (r'"back\\slash"', "back\\slash"),
            (r'"\\"', "\\"),
            ('""', ""),
        ]
        for source, expected in cases:
            with self.subTest(source=source):
                self.assertEqual(self._tokens(source), [("STRING", expected)])

    def test_backslash_before_other_character_resets_escape_state(self) -> None:
        # The escape applies to exactly one character; the closing quote still ends the string.
        self.assertEqual(self._tokens(r'"a\nb" home'), [("STRING", "anb"), ("WORD", "home")])
        self.assertEqual(self._tokens(r'"\x\"" end'), [("STRING", 'x"'), ("WORD", "end")])

    def test_unterminated_string_ends_at_end_of_input(self) -> None:
        self.assertEqual(self._tokens('insert "abc'), [("WORD", "insert"), ("STRING", "abc")])
        self.assertEqual(self._tokens('"'), [("STRING", "")])

    def test_string_directly_after_word_finishes_the_word_first(self) -> None:
        self.assertEqual(
            self._tokens('ab"cd" ef', with_positions=True),
            [("WORD", "ab", 1, 3), ("STRING", "cd", 1, 6), ("WORD", "ef", 1, 10)],
        )

    def test_bracket_tokens_when_nothing_buffered(self) -> None:
        self.assertEqual(
            self._tokens("( ) { }", with_positions=True),
            [
                ("LPAREN", "(", 1, 1),
                ("RPAREN", ")", 1, 3),
                ("LBRACE", "{", 1, 5),
                ("RBRACE", "}", 1, 7),
            ],
        )

    def test_bracket_after_text_merges_into_next_word(self) -> None:
        self.assertEqual(self._tokens("home(end"), [("WORD", "home"), ("WORD", "(end")])
        self.assertEqual(self._tokens("12}"), [("INT", "12"), ("WORD", "}")])
        self.assertEqual(self._tokens("a)b c"), [("WORD", "a"), ("WORD", ")b"), ("WORD", "c")])

    def test_end_position_tracks_consumed_input(self) -> None:
        lexer = tokenize("home\n")
        list(lexer)
        self.assertEqual(lexer.end_position(), (2, 1))

        lexer = tokenize("home end")
        list(lexer)
        self.assertEqual(lexer.end_position(), (1, 9))


if __name__ == "__main__":
    unittest.main()
