from .keysize import best_keysizes, rank_keysizes
from .repeating_key import break_repeating_key_xor, break_with_keysize
from .single_byte import decrypt_single_byte_xor, find_best, rank_single_byte_keys

__all__ = [
    "best_keysizes",
    "rank_keysizes",
    "break_repeating_key_xor",
    "break_with_keysize",
    "decrypt_single_byte_xor",
    "find_best",
    "rank_single_byte_keys",
]
