# filename: huffman_service.py
#
# Archive layout (big-endian):
#   4 bytes   length N of the cipher text
#   N bytes   cipher text (ASCII)
#   8 bytes   number of payload bits B
#   rest      ceil(B / 8) payload bytes, zero-padded

import logging
import struct
from pathlib import Path

from huffman_bits import BitReader, BitWriter
from huffman_cipher import deserialize, dumps, loads, serialize
from huffman_config import Config
from huffman_core import HuffmanLogic, count_frequencies
from huffman_errors import MalformedArchiveError
from huffman_stream import decode, encode

logger = logging.getLogger(__name__)

_CIPHER_LEN = struct.Struct(">I")
_BIT_LEN = struct.Struct(">Q")


class HuffmanService:
    def __init__(self, config=None):
        self.config = config or Config.default()
        self.logic = HuffmanLogic()

    @property
    def bit_order(self):
        return self.config.bits.order

    def build_codes(self, data):
        """Codeword table the service would use for data."""
        if not data:
            return {}
        return self.logic.generate_codes(self.logic.build_tree(count_frequencies(data)))

    # ---- bytes ----
    def compress(self, data):
        return self.compress_symbols(data)

    def decompress(self, archive):
        if not archive:
            return b""
        symbols = list(self._decode_archive(archive))
        if any(symbol > 0xFF for symbol in symbols):
            raise MalformedArchiveError("archive holds symbols that are not byte values")
        return bytes(symbols)

    # ---- text ----
    def compress_text(self, text):
        return self.compress_symbols([ord(ch) for ch in text])

    def decompress_text(self, archive):
        if not archive:
            return ""
        symbols = list(self._decode_archive(archive))
        if any(symbol > 0x10FFFF for symbol in symbols):
            raise MalformedArchiveError("archive holds symbols that are not code points")
        return "".join(chr(symbol) for symbol in symbols)

    def compress_symbols(self, symbols):
        symbols = list(symbols)
        if not symbols:
            return b""
        cipher, bit_length, payload = self._encode_symbols(symbols)
        archive = _CIPHER_LEN.pack(len(cipher)) + cipher + _BIT_LEN.pack(bit_length) + payload
        logger.info("compressed %d symbols into %d bytes (%d payload bits)", len(symbols), len(archive), bit_length)
        return archive

    # ---- files ----
    def compress_file(self, src, out_stem=None):
        """
        Write <stem>.code (cipher text) and <stem>.short (bit length + payload).

        Returns both paths.
        """
        src = Path(src)
        stem = Path(out_stem) if out_stem is not None else src
        code_path = self.config.paths.cipher_path_for(stem)
        short_path = self.config.paths.compressed_path_for(stem)

        data = src.read_bytes()
        if data:
            cipher, bit_length, payload = self._encode_symbols(data)
        else:
            cipher, bit_length, payload = b"", 0, b""
        code_path.write_bytes(cipher)
        short_path.write_bytes(_BIT_LEN.pack(bit_length) + payload)
        logger.info("%s -> %s, %s", src, code_path, short_path)
        return code_path, short_path

    def decompress_file(self, code_path, short_path, dst=None):
        code_path = Path(code_path)
        dst = Path(dst) if dst is not None else self.config.paths.decoded_path_for(short_path)

        try:
            cipher = code_path.read_text(encoding="ascii")
        except UnicodeDecodeError as e:
            raise MalformedArchiveError(f"{code_path} is not ASCII cipher text") from e
        bit_length, payload = self._split_payload(Path(short_path).read_bytes())
        if not cipher and bit_length == 0:
            dst.write_bytes(b"")
            return dst

        tree = deserialize(loads(cipher))
        reader = BitReader(payload, bit_length, self.bit_order)
        symbols = list(decode(tree, reader))
        if any(symbol > 0xFF for symbol in symbols):
            raise MalformedArchiveError(f"{code_path} holds symbols that are not byte values")
        dst.write_bytes(bytes(symbols))
        logger.info("%s + %s -> %s", code_path, short_path, dst)
        return dst

    # ---- helpers ----
    def _encode_symbols(self, symbols):
        tree = self.logic.build_tree(count_frequencies(symbols))
        cipher = dumps(serialize(tree)).encode("ascii")
        writer = BitWriter(self.bit_order)
        bit_length = encode(tree, symbols, writer)
        return cipher, bit_length, writer.getvalue()

    def _decode_archive(self, archive):
        if len(archive) < _CIPHER_LEN.size:
            raise MalformedArchiveError("archive is too short for its header")
        (cipher_len,) = _CIPHER_LEN.unpack_from(archive)
        start = _CIPHER_LEN.size
        if start + cipher_len > len(archive):
            raise MalformedArchiveError(f"cipher length {cipher_len} exceeds archive size {len(archive)}")
        try:
            cipher = archive[start:start + cipher_len].decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedArchiveError("cipher text is not ASCII") from e

        tree = deserialize(loads(cipher))
        bit_length, payload = self._split_payload(archive[start + cipher_len:])
        return decode(tree, BitReader(payload, bit_length, self.bit_order))

    @staticmethod
    def _split_payload(blob):
        if len(blob) < _BIT_LEN.size:
            raise MalformedArchiveError("payload is too short for its bit length")
        (bit_length,) = _BIT_LEN.unpack_from(blob)
        payload = blob[_BIT_LEN.size:]
        if (bit_length + 7) // 8 != len(payload):
            raise MalformedArchiveError(f"{bit_length} payload bits do not fit {len(payload)} bytes")
        return bit_length, payload
