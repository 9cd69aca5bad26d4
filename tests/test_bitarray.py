"""
Tests for the bit-addressable word view.

Verifies MSB-first addressing across word widths, in-place writes
through to the caller's buffer, and the single-bit reference helper.
"""

import numpy as np
import pytest

from bitsync.bitarray import BitArray, BitReference, word_bits_of


UNSIGNED_DTYPES = [np.uint8, np.uint16, np.uint32, np.uint64]


class TestWordWidth:
    """Word width detection from the wrapped buffer."""

    @pytest.mark.parametrize("dtype", UNSIGNED_DTYPES)
    def test_numpy_dtype_width(self, dtype):
        arr = np.zeros(2, dtype=dtype)
        assert BitArray(arr).word_bits == np.dtype(dtype).itemsize * 8

    def test_bytearray_is_8_bit(self):
        assert BitArray(bytearray(3)).word_bits == 8

    def test_explicit_width_for_list(self):
        view = BitArray([0, 0], word_bits=12)
        assert view.word_bits == 12
        assert len(view) == 24

    def test_signed_dtype_rejected(self):
        with pytest.raises(TypeError):
            BitArray(np.zeros(1, dtype=np.int32))

    def test_float_dtype_rejected(self):
        with pytest.raises(TypeError):
            word_bits_of(np.zeros(1, dtype=np.float64))

    def test_unknown_container_needs_width(self):
        with pytest.raises(TypeError):
            BitArray([0, 0])

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValueError):
            BitArray([0], word_bits=0)


class TestBitOrdering:
    """Bits are numbered most-significant first within each word."""

    @pytest.mark.parametrize("dtype", UNSIGNED_DTYPES)
    def test_bit_zero_is_msb(self, dtype):
        arr = np.zeros(1, dtype=dtype)
        width = np.dtype(dtype).itemsize * 8
        BitArray(arr).set(0, True)
        assert int(arr[0]) == 1 << (width - 1)

    @pytest.mark.parametrize("dtype", UNSIGNED_DTYPES)
    def test_last_bit_of_word_is_lsb(self, dtype):
        arr = np.zeros(2, dtype=dtype)
        width = np.dtype(dtype).itemsize * 8
        BitArray(arr).set(width - 1, True)
        assert int(arr[0]) == 1
        assert int(arr[1]) == 0

    def test_second_word_addressing(self):
        arr = np.zeros(2, dtype=np.uint16)
        BitArray(arr).set(16, True)
        assert int(arr[0]) == 0
        assert int(arr[1]) == 0x8000

    def test_get_reads_existing_pattern(self):
        view = BitArray(bytes([0b10100000, 0b00000001]))
        assert [view[i] for i in range(3)] == [True, False, True]
        assert view[15] is True
        assert view[14] is False


class TestSetAndFlip:
    """Writes go through to the buffer and touch a single bit."""

    @pytest.mark.parametrize("dtype", UNSIGNED_DTYPES)
    def test_round_trip_leaves_other_bits(self, dtype):
        rng = np.random.default_rng(1234)
        info = np.iinfo(dtype)
        arr = rng.integers(0, info.max, size=3, dtype=dtype, endpoint=True)
        view = BitArray(arr)
        for pos in range(0, len(view), 5):
            for value in (True, False):
                before = [view.get(p) for p in range(len(view))]
                view.set(pos, value)
                assert view.get(pos) is value
                after = [view.get(p) for p in range(len(view))]
                before[pos] = value
                assert after == before

    def test_clear_keeps_all_ones_word_otherwise_set(self):
        arr = np.full(1, 0xFFFFFFFFFFFFFFFF, dtype=np.uint64)
        BitArray(arr).set(0, False)
        assert int(arr[0]) == 0x7FFFFFFFFFFFFFFF

    def test_flip_twice_is_identity(self):
        data = bytearray(b'\x5a\xc3')
        view = BitArray(data)
        for pos in range(len(view)):
            original = view[pos]
            view.flip(pos)
            assert view[pos] is (not original)
            view.flip(pos)
            assert view[pos] is original
        assert data == bytearray(b'\x5a\xc3')

    def test_setitem_writes_through(self):
        data = bytearray(1)
        view = BitArray(data)
        view[7] = True
        view[1] = 1
        assert data[0] == 0b01000001

    def test_list_buffer_with_explicit_width(self):
        words = [0, 0]
        view = BitArray(words, word_bits=4)
        view.set(5, True)
        assert words == [0, 0b0100]

    def test_bits_generator_order(self):
        view = BitArray(bytes([0b11001010]))
        assert list(view.bits()) == [1, 1, 0, 0, 1, 0, 1, 0]
        assert list(view.bits(2, 5)) == [0, 0, 1]


class TestBitReference:
    """The reference helper reads and writes a single bit lazily."""

    @pytest.fixture
    def view(self):
        return BitArray(bytearray([0b10000000]))

    def test_reads_current_value(self, view):
        ref = view.ref(0)
        assert isinstance(ref, BitReference)
        assert bool(ref) is True
        assert int(ref) == 1
        assert (~ref) is False
        view.set(0, False)
        assert bool(ref) is False

    def test_set_and_flip(self, view):
        ref = view.ref(3)
        ref.set(True)
        assert view[3] is True
        ref.flip()
        assert view[3] is False

    def test_assign_from_other_reference(self, view):
        view.ref(5).set(view.ref(0))
        assert view[5] is True
        view[6] = view.ref(1)
        assert view[6] is False

    def test_setitem_with_reference_value(self, view):
        view[2] = view.ref(0)
        assert view.data[0] == 0b10100000
