# filename: huffman_errors.py


class HuffmanError(ValueError):
    """Base class for every error raised by the codec."""


class EmptyAlphabetError(HuffmanError):
    def __init__(self, message="no symbol has a positive frequency"):
        super().__init__(message)


class MalformedCipherError(HuffmanError):
    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnknownSymbolError(HuffmanError):
    def __init__(self, symbol, position):
        self.symbol = symbol
        self.position = position
        super().__init__(f"symbol {symbol!r} at position {position} has no codeword")


class MalformedArchiveError(HuffmanError):
    pass
