# granitedb

Components of a document-oriented database engine, plus an interactive
command-line client that talks to a server over newline-delimited JSON.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module                  | Provides                                                                  |
|-------------------------|---------------------------------------------------------------------------|
| `granitedb.config`      | `GraniteConfig` and its sections, loaded from and saved to JSON           |
| `granitedb.cursor`      | `Cursor`, batched iteration over a list of results                        |
| `granitedb.lru`         | `LruCache` with hit/miss statistics                                       |
| `granitedb.bloom`       | `BloomFilter` for fast negative membership tests                          |
| `granitedb.compression` | `CompressionEngine` with RLE, LZ77-style and snappy-like codecs           |
| `granitedb.encryption`  | `EncryptionEngine`, AES-256-GCM with a random nonce per message           |
| `granitedb.rbac`        | `RbacManager` with built-in roles and custom roles                        |
| `granitedb.users`       | `UserManager` for accounts, scrypt password hashes and role grants        |
| `granitedb.embedding`   | `EmbeddingPipeline`, deterministic byte-derived text embeddings           |
| `granitedb.inference`   | `InferenceEngine`, keyword classification, entity extraction, truncation  |
| `granitedb.cli`         | the `granite-cli` interactive client                                      |

## Examples

### Configuration

`GraniteConfig.load_from_file` returns the defaults when the file does not
exist. A file that exists must hold every field; a malformed or incomplete
file raises `ConfigError`.

```python
from granitedb.config import GraniteConfig

config = GraniteConfig.load_from_file("granite.json")
print(config.server.port)          # 6380 unless overridden
config.save_to_file("granite.json")
```

The sections are `server` (`ServerConfig`), `storage` (`StorageConfig`),
`auth` (`AuthConfig`), `replication` (`ReplicationConfig`), `sharding`
(`ShardingConfig`) and `logging` (`LoggingConfig`). `to_dict` and
`from_dict` convert to and from plain JSON-compatible dictionaries.

### Cursors

```python
from granitedb.cursor import Cursor

cursor = Cursor([{"n": i} for i in range(5)], 2)
while cursor.has_next():
    print(cursor.next_batch())
print(cursor.total(), cursor.remaining())
cursor.rewind()
print(cursor.collect_all())
```

### Bloom filter and LRU cache

```python
from granitedb.bloom import BloomFilter
from granitedb.lru import LruCache

seen = BloomFilter(1000, 0.01)
seen.insert_str("users.42")
assert seen.might_contain_str("users.42")
print(seen.false_positive_rate())

cache = LruCache(2)
cache.put("a", 1)
cache.put("b", 2)
cache.get("a")
cache.put("c", 3)                  # evicts "b"
print(cache.hit_rate(), cache.stats())
```

`BloomFilter.with_params(size, num_hashes)` builds a filter with explicit
parameters instead of sizing it from an expected item count.

### Compression

```python
from granitedb.compression import CompressionAlgorithm, CompressionEngine

engine = CompressionEngine(CompressionAlgorithm.RLE)
packed = engine.compress(b"aaaaabbbb")
assert engine.decompress(packed) == b"aaaaabbbb"
print(engine.stats())
```

The algorithms are `NONE`, `RLE`, `LZ77` and `SNAPPY_LIKE`. `RLE` and
`LZ77` round-trip any input; `LZ77` raises `ValueError` on a corrupt
back-reference. `SNAPPY_LIKE` stores copy lengths in three bits, so a
repeated run longer than seven bytes is recorded only in part and does not
come back whole.

### Encryption at rest

```python
from granitedb.encryption import EncryptionEngine

engine = EncryptionEngine(EncryptionEngine.generate_key())
blob = engine.encrypt(b"document bytes")
assert engine.decrypt(blob) == b"document bytes"
```

The output is the 12-byte nonce followed by the ciphertext. Tampered or
truncated data raises `DecryptionError`.

### Users and access control

```python
from granitedb.rbac import Action, RbacManager
from granitedb.users import UserManager

users = UserManager()
password = "password"
users.create_user("alice", password, ["readWrite"])
user = users.authenticate("alice", password)

rbac = RbacManager()
rbac.authorize(user.roles, Action.WRITE)   # raises AuthorizationDenied if not allowed
print([role.name for role in rbac.list_roles()])
```

Built-in roles are `read`, `readWrite`, `dbAdmin`, `userAdmin` and `root`.
`UserManager` raises `UserAlreadyExists`, `UserNotFound` and
`AuthenticationFailed`.

### Embeddings and inference

```python
from granitedb.embedding import EmbeddingModelConfig, EmbeddingPipeline
from granitedb.inference import InferenceEngine

pipeline = EmbeddingPipeline(EmbeddingModelConfig(dimensions=8), ["title", "tags"])
text = pipeline.extract_text({"title": "Granite", "tags": ["rock", "stone"]})
vector = pipeline.generate_embedding(text)     # unit-length list of 8 floats

engine = InferenceEngine()
print(engine.classify("urgent: server down", ["urgent", "spam"]))
print(engine.extract_entities("mail info@example.com 42", ["EMAIL", "NUMBER"]))
```

Embeddings are computed from the bytes of the text, not by a trained model,
and the inference tasks are keyword and pattern based.

## Command-line client

```
granite-cli --host 127.0.0.1 --port 6380 --database default
```

Options: `--host`, `-p/--port`, `-d/--database` and `-V/--version`. Inside
the client, type `help` for the list of commands: `ping`, `status`, `dbs`,
`use <db>`, `createdb <name>`, `collections`, `createcol <name>`,
`insert <col> <json>`, `find <col> [filter]`, `count <col> [filter]`,
`delete <col> <filter>`, and `exit` or `quit`. Each command is sent as one
line of JSON and the reply line is printed as indented JSON.

## What this package does not do

There is no database server, storage engine, collection or query layer in
this package. `granite-cli` only works against a server that speaks its
newline-delimited JSON requests; none is included here. The configuration
classes describe server, storage, replication and sharding settings, but
nothing in the package acts on them beyond loading and saving.