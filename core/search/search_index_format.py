# core/search/search_index_format.py
"""
Search Index Format Specifications
==================================

This module documents the format of the spectral bloom filter index used by
the document search. The index estimates how often each word occurs in each
document without storing term-frequency tables: every document gets a
counting ("spectral") bloom filter whose counters are packed into a printable
string.

The index is a single JSON file, data/search_index.json by default, holding a
list with one record per document (in ranking tie-break order).


Record Structure
----------------

    Field             Type    Description
    sbf_base2p15      string  Counter array, base-2^15 encoded (see below)
    n_hash_functions  int     Probes per word (hash seeds 0..n-1)
    width             int     Bits per counter; max estimate is 2^width - 1
    size              int     Number of counter slots, also the hash modulus
    title             string  Display title, passed through unchanged
    url               string  Document link, passed through unchanged

Example:

    {"sbf_base2p15": "a...", "n_hash_functions": 7, "width": 4,
     "size": 96, "title": "Hello World", "url": "/posts/hello-world"}


Counter Array
-------------

The counters are written back to back, most significant bit first, as one
bit string of size * width bits:

    counter 0        counter 1        ...   counter size-1
    [width bits]     [width bits]           [width bits]

Counter i therefore occupies bits [i * width, (i + 1) * width).


Base-2^15 Encoding
------------------

    Position  Content
    0         Hex digit (0-f): number of zero bits padding the last char
    1..k      chr(v + 0xA1) for each consecutive 15-bit value v

All payload characters lie in U+00A1..U+80A0, below the UTF-16 surrogate
range, so the string survives any JSON/HTML round trip unchanged. A single
counter is read by decoding only the one or two characters covering its bits
(see core/compression/base2p15.py).


Hashing
-------

Slot for probe j of word w:

    murmurhash3_x86_32(w, seed=j) % size

Words are hashed one byte per character (low 8 bits of the code point). The
tokenizer folds everything to ASCII first, so builder and searcher agree.


Frequency Estimate
------------------

    frequency(w) = min(counter[slot_j(w)] for j in 0..n_hash_functions-1)

Filters are filled with conservative updates (all probe slots raised to
min + frequency, saturating at 2^width - 1), which keeps the estimate
from ever undershooting the real count.


Sizing
------

For n unique words and false positive rate p:

    size             = ceil(-n * ln(p) / ln(2)^2)
    n_hash_functions = ceil(size / n * ln(2))

With p = 0.01 that is about 9.6 slots and 7 probes per unique word, or
roughly 38 bits (under 3 characters) per word at width 4.
"""
