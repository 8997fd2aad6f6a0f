import itertools
import random

import pytest

from huffman_bits import BitList, BitReader, BitWriter, IterBitSource, bits_from_string
from huffman_cipher import deserialize, dumps, loads, serialize
from huffman_core import HuffmanLogic
from huffman_errors import UnknownSymbolError
from huffman_stream import codeword_table, decode, encode

CLASSIC = {ord('a'): 45, ord('b'): 13, ord('c'): 12, ord('d'): 16, ord('e'): 9, ord('f'): 5}

# Doubling weights give a left spine eight levels deep, so up to seven
# zero padding bits never complete a codeword.
DEEP = {1: 1, 2: 1, 3: 3, 4: 6, 5: 12, 6: 24, 7: 48, 8: 96, 9: 192}


def _build(freqs):
    return HuffmanLogic().build_tree(freqs)


def test_encode_classic_bits():
    sink = BitList()
    written = encode(_build(CLASSIC), b'face', sink)
    assert ''.join(map(str, sink)) == '1100' + '0' + '100' + '1101'
    assert written == 12


def test_decode_classic_bits():
    out = list(decode(_build(CLASSIC), bits_from_string('110001001101')))
    assert bytes(out) == b'face'


def test_roundtrip_random_sequences():
    rnd = random.Random(99)
    for _ in range(30):
        n = rnd.randint(1, 40)
        freqs = {symbol: rnd.randint(1, 100) for symbol in rnd.sample(range(500), n)}
        tree = _build(freqs)
        symbols = [rnd.choice(list(freqs)) for _ in range(rnd.randint(0, 300))]

        sink = BitList()
        encode(tree, symbols, sink)
        assert list(decode(tree, IterBitSource(sink))) == symbols


def test_roundtrip_through_cipher():
    tree = _build(CLASSIC)
    sink = BitList()
    encode(tree, b'decafbad', sink)

    rebuilt = deserialize(loads(dumps(serialize(tree))))
    assert bytes(decode(rebuilt, IterBitSource(sink))) == b'decafbad'


def test_deep_tree_codes():
    assert codeword_table(_build(DEEP)) == {
        1: '00000000',
        2: '00000001',
        3: '0000001',
        4: '000001',
        5: '00001',
        6: '0001',
        7: '001',
        8: '01',
        9: '1',
    }


def test_byte_padded_stream_decodes_exactly():
    tree = _build(DEEP)
    writer = BitWriter()
    encode(tree, [9, 8, 9], writer)
    data = writer.getvalue()
    assert data == bytes([0b10110000])

    # read every bit, padding included
    assert list(decode(tree, BitReader(data))) == [9, 8, 9]


def test_byte_padded_random_roundtrip():
    rnd = random.Random(2024)
    tree = _build(DEEP)
    for _ in range(50):
        symbols = [rnd.choice(list(DEEP)) for _ in range(rnd.randint(1, 120))]
        writer = BitWriter()
        encode(tree, symbols, writer)
        assert list(decode(tree, BitReader(writer.getvalue()))) == symbols


def test_trailing_partial_codeword_is_dropped():
    tree = _build(CLASSIC)
    # 'f' then the first three bits of 'e'
    assert list(decode(tree, bits_from_string('1100110'))) == [ord('f')]
    assert list(decode(tree, bits_from_string('1'))) == []
    assert list(decode(tree, bits_from_string(''))) == []


def test_decode_is_lazy():
    tree = _build(CLASSIC)
    # endless stream of 'a'
    symbols = decode(tree, IterBitSource(itertools.repeat(0)))
    assert list(itertools.islice(symbols, 5)) == [ord('a')] * 5


def test_decode_pulls_only_needed_bits():
    tree = _build(CLASSIC)
    source = bits_from_string('0' + '111' + '0')
    symbols = decode(tree, source)
    assert next(symbols) == ord('a')
    assert next(symbols) == ord('d')
    assert source.has_next()


def test_single_symbol_one_bit_each():
    tree = _build({ord('x'): 7})
    sink = BitList()
    assert encode(tree, b'xxxx', sink) == 4
    assert sink == [0, 0, 0, 0]

    assert bytes(decode(tree, IterBitSource(sink))) == b'xxxx'
    # any bit value decodes to the only symbol
    assert bytes(decode(tree, bits_from_string('1011'))) == b'xxxx'


def test_single_symbol_through_cipher():
    tree = deserialize(loads(dumps(serialize(_build({ord('x'): 7})))))
    sink = BitList()
    encode(tree, b'xxx', sink)
    assert bytes(decode(tree, IterBitSource(sink))) == b'xxx'


def test_unknown_symbol_stops_encoding():
    tree = _build(CLASSIC)
    sink = BitList()
    with pytest.raises(UnknownSymbolError) as exc:
        encode(tree, [ord('a'), ord('b'), ord('z'), ord('a')], sink)
    assert exc.value.symbol == ord('z')
    assert exc.value.position == 2
    # bits of the symbols before the failure stay written
    assert ''.join(map(str, sink)) == '0' + '101'


def test_encode_empty_sequence():
    sink = BitList()
    assert encode(_build(CLASSIC), [], sink) == 0
    assert sink == []
