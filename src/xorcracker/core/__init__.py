from .errors import DecodeError, DegenerateInput, NoSolutionFound, XorCrackerError
from .results import KeyLengthCandidate, RepeatingKeyResult, SingleByteResult
from .scoring import FrequencyModel, build_model, score

__all__ = [
    "DecodeError",
    "DegenerateInput",
    "NoSolutionFound",
    "XorCrackerError",
    "KeyLengthCandidate",
    "RepeatingKeyResult",
    "SingleByteResult",
    "FrequencyModel",
    "build_model",
    "score",
]
