# petnet

Pure-Python building blocks for a small user-space network stack. The package depends only on the standard library.

## Installation

```
pip install .
```

To install and run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `petnet.hashing` holds the hash functions the tables use.
  - `hash_u32` is a multiplicative hash of a 32-bit value.
  - `hash_ptr` folds a 64-bit integer down to 32 bits.
  - `hash_buffer` is an ELF-style hash of a byte buffer that also mixes in each byte's index.
  - `mix_hash` scrambles a 32-bit hash to protect against weak hash functions.
- `petnet.hashtable.HashTable` is a hash table with separate chaining and prime-sized bucket arrays.
  - You can pass your own hash and equality functions. Without them it uses `hash()` and `==`.
  - Its methods are `insert`, `change`, `search`, `remove` (with an optional condition on the value), `inc` and `dec` for counters, `remove_where`, `items` and `clear`.
  - It also supports `len()`, iteration over keys and `in`.
  - `insert` does not replace an entry that has the same key.
  - `change`, `inc` and `dec` raise `KeyError` when the key is missing.
- `petnet.json_tree` is a mutable JSON tree.
  - A `JsonNode` has a `JsonType`. Scalar nodes keep their value in `value`. Objects and arrays keep child nodes.
  - The object methods are `get`, `add`, `set` and `delete`.
  - The array methods are `get_item`, `set_item`, `add_item` and `delete_item`.
  - `splice`, `array_splice` and `split` move subtrees from one place to another.
  - `serialize()` and the module-level `serialize(node)` write tab-indented text. `escape_string` escapes quotes, backslashes and control characters.
  - Operations that are not valid for a node raise `JsonError`.
- `petnet.json_parse` provides `parse(text)`, which builds a `JsonNode` tree from lenient JSON text.
  - Commas are optional.
  - `//` and `/* */` comments are allowed.
  - Integers may be written in hexadecimal or octal.
  - Text after the first complete value is ignored.
  - Malformed input raises `JsonError`.
  - The module also provides `unescape_string`.
- `petnet.udp.UdpHeader` is the eight-byte UDP header.
  - `pack()` and `UdpHeader.unpack(data)` encode and decode it in network byte order.
  - `to_json()` returns it as a JSON object node.
  - `describe()` returns a labelled text rendering of it.
- `petnet.udp_endpoint.UdpEndpointMap` is a thread-safe registry of UDP endpoints.
  - `create` registers a socket object bound to a local IPv4 address and port.
  - Look endpoints up with `lookup_sock` (by socket identity) or `lookup_ipv4` (by address and port).
  - `remove` unregisters an endpoint. `close` clears the map and refuses any new endpoints after that.
  - A `UdpEndpoint` is a context manager that holds the endpoint's own lock.
- `petnet.files` holds small file-system helpers.
  - The functions are `read_file`, `write_file`, `dir_exists`, `file_exists`, `make_dir`, `touch_file`, `delete_file` and `delete_path` (a recursive delete).
  - `write_tmpfile` returns a `TempFile`, which is an anonymous temporary file that can be used in a `with` block.

## Examples

```python
from petnet.hashtable import HashTable

table = HashTable()
table.insert("hits", 0)
table.inc("hits", 5)
assert table.search("hits") == 5
```

```python
from petnet.json_parse import parse

doc = parse('{"port": 53, /* dns */ "proto": "udp"}')
print(doc.serialize())
```

```python
from petnet.udp import UdpHeader

header = UdpHeader(src_port=5353, dst_port=53, length=12)
assert UdpHeader.unpack(header.pack()) == header
print(header.describe())
```

```python
from petnet.udp_endpoint import UdpEndpointMap

endpoints = UdpEndpointMap()
sock = object()
endpoints.create(sock, "10.0.0.1", 5000)
endpoint = endpoints.lookup_ipv4("10.0.0.1", 5000)
with endpoint:
    assert endpoint.sock is sock
```

## What it does not do

- It has no network device and does not send or receive packets. `UdpHeader` only encodes and describes headers, and it does not compute checksums.
- It has no timers or retransmission, no priority queue, and no record of TCP connections. The only connection bookkeeping it keeps is the UDP endpoint map.
- It provides no command-line program.