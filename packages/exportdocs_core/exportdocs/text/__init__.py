from .amount_words import CURRENCIES, amount_to_words, integer_to_words

__all__ = ["CURRENCIES", "amount_to_words", "integer_to_words"]
