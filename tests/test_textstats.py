import pytest

from redline.textstats import (
    char_similarity,
    contains_negation,
    count_syllables,
    count_words,
    flesch_reading_ease,
    length_ratio,
    levenshtein_distance,
    stopword_ratio,
    whitespace_ratio,
    word_overlap,
)


@pytest.mark.parametrize("text", ["", "a", "hello", "hello world"])
def test_levenshtein_identity_is_zero(text):
    assert levenshtein_distance(text, text) == 0


@pytest.mark.parametrize("text", ["a", "hello", "hello world"])
def test_levenshtein_against_empty_is_length(text):
    assert levenshtein_distance(text, "") == len(text)
    assert levenshtein_distance("", text) == len(text)


@pytest.mark.parametrize(
    "s1,s2", [("kitten", "sitting"), ("flaw", "lawn"), ("hello", "world"), ("abc", "")]
)
def test_levenshtein_symmetric_and_bounded(s1, s2):
    forward = levenshtein_distance(s1, s2)
    assert forward == levenshtein_distance(s2, s1)
    assert abs(len(s1) - len(s2)) <= forward <= max(len(s1), len(s2))


def test_levenshtein_known_value():
    assert levenshtein_distance("kitten", "sitting") == 3


def test_char_similarity_bounds():
    assert char_similarity("", "") == 1.0
    assert char_similarity("hello", "hello") == 1.0
    assert char_similarity("abc", "xyz") == 0.0
    value = char_similarity("hello", "hallo")
    assert 0.0 < value < 1.0


def test_word_overlap():
    assert word_overlap("", "") == 1.0
    assert word_overlap("Hello World", "hello world") == 1.0
    assert word_overlap("hello", "goodbye") == 0.0
    partial = word_overlap("hello world", "goodbye world")
    assert 0.0 < partial < 1.0
    assert partial == word_overlap("goodbye world", "hello world")


def test_length_ratio():
    assert length_ratio("", "") == 1.0
    assert length_ratio("abc", "") == 0.0
    assert length_ratio("abcd", "abcd") == 1.0
    assert length_ratio("ab", "abcd") == length_ratio("abcd", "ab")


def test_count_words():
    assert count_words("") == 0
    assert count_words("hello") == 1
    assert count_words("  a   b\tc\n") == 3


def test_word_count_difference_from_source_case():
    assert count_words("hello world") - count_words("hello") == 1


def test_count_syllables_empty_and_minimum():
    assert count_syllables("") == 0
    assert count_syllables("bcd") == 1


def test_count_syllables_silent_e():
    assert count_syllables("make") == count_syllables("mak")
    assert count_syllables("CAKE") == count_syllables("cake")


def test_count_syllables_grows_with_vowel_groups():
    assert count_syllables("banana") > count_syllables("ban")


def test_flesch_reading_ease_empty():
    assert flesch_reading_ease("") == 0.0
    assert flesch_reading_ease("   ") == 0.0


def test_flesch_prefers_short_words():
    assert flesch_reading_ease("The cat sat on the mat.") > flesch_reading_ease(
        "The feline reclined upon the textile floor covering."
    )


def test_flesch_more_sentences_is_easier():
    assert flesch_reading_ease("Cat sat. Dog ran.") > flesch_reading_ease("Cat sat dog ran")


def test_stopword_ratio():
    assert stopword_ratio("") == 0.0
    assert stopword_ratio("The the THE") == 1.0
    assert stopword_ratio("cat dog") == 0.0
    assert 0.0 < stopword_ratio("the cat") < 1.0


def test_whitespace_ratio():
    assert whitespace_ratio("") == 0.0
    assert whitespace_ratio("hello") == 0.0
    assert whitespace_ratio("   ") == 1.0
    assert whitespace_ratio("h e l l o") > whitespace_ratio("hello")


@pytest.mark.parametrize(
    "text", ["I don't like this.", "never again", "There is NO way", "nothing here"]
)
def test_contains_negation_true(text):
    assert contains_negation(text) is True


@pytest.mark.parametrize("text", ["I like this.", "a knot in the rope", "", "notable"])
def test_contains_negation_false(text):
    assert contains_negation(text) is False


def test_negation_changed_from_source_case():
    assert contains_negation("I like this.") != contains_negation("I don't like this.")