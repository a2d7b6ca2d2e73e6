# grimoire

A collection of small, independent building blocks for Python applications:
random identifiers, a threaded logger, caches, a state machine, event hooks,
encoders with compression and encryption, WSGI rate limiting, markdown articles
with front matter and text hidden in images.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `grimoire.uid` | `new()`, `new_uid(n)`, `new_uid_src(n, charset)`, `new_secure_512()` and the character sets `ALPHA_NUMERIC`, `UPPERCASE_ALPHA_NUMERIC`, `ALPHABETIC`, `NUMERIC` |
| `grimoire.names` | `new_name()` (`Name_Adjective_NNNN`) and `new_last_name(name)` |
| `grimoire.levels` | `Level`, an `IntEnum` from `NULL` to `FATAL`, with `Level.from_string`, `Level.label` and `level_from_string` |
| `grimoire.bitflags` | `Bit`, a 32-bit flag set with `set`, `clear`, `toggle` and `has` |
| `grimoire.repo` | `Repo`, a lock-guarded dictionary where the first value added for a key is kept |
| `grimoire.shardcache` | `ShardCache`, a string-keyed store spread over shards by FNV-1 hash |
| `grimoire.stamps` | `numerical_timestamp()`, local time as `YYYYMMDDhhmmss` |
| `grimoire.cache` | `Cache`, a fixed-capacity buffer of recent items that can flush itself to JSON `.log` files and read them back |
| `grimoire.logger` | `Logger`, `LoggerConfig`, `Log` and `Pagination`: a logger that processes entries on a worker thread, with child service loggers |
| `grimoire.stdout_logger` | `StdOutLogger`, a logger that only prints |
| `grimoire.sim_logger` | `SimLogger`, a synchronous logger with a minimum level; children share its cache, counter and output |
| `grimoire.statemachine` | `StateMachine`, `StateConfig` and `StateMachineError` |
| `grimoire.hooks` | `Hook` (`CONNECT`, `DISCONNECT`) and `Hooks`, which runs registered handlers on a background thread |
| `grimoire.timeline` | `Timeline` and `Layer`: keyframe actions played back once at millisecond resolution |
| `grimoire.crypto` | `Crypto`: AES in GCM, ECB and CFB modes and Blowfish in CBC mode |
| `grimoire.coder` | `MultiCoder` and the encoders `encode_json`/`decode_json`, `encode_pickle`/`decode_pickle` |
| `grimoire.net` | `try_connection(host, port, attempts, success)` and `chain_middleware(app, *middlewares)` for WSGI apps |
| `grimoire.ratelimit` | `RateLimiter` with WSGI `middleware` and `check`, and the errors `EmptyIPError`, `LockedError`, `TooManyRequestsError` |
| `grimoire.susdetect` | `SusDetect`, WSGI middleware answering 403 when any check on the environ fails |
| `grimoire.mdservice` | `MDService`, `Article`, `FrontMatter` and `FrontMatterError` |
| `grimoire.steganography` | `encode(message, input_path, output_path)` and `decode(image_path)`, plus their helpers |
| `grimoire.messages` | `Message` and `SimMessage` payloads with `validate()` raising `MessageError` |
| `grimoire.serveconfig` | `ServerConfig` and `TLSConfig`, with defaults resolved on demand |

## Examples

Identifiers and names:

```python
from grimoire.uid import NUMERIC, new_uid, new_uid_src
from grimoire.names import new_last_name

session_id = new_uid(8)
pin = new_uid_src(4, NUMERIC)
service = new_last_name("Worker")   # e.g. "Worker_Arcane_0427"
```

A state machine:

```python
from grimoire.statemachine import StateMachine

sm = StateMachine("Idle")
sm.on_state_changed(lambda prev, curr: print(prev, "->", curr))

sm.state("Idle").on_entry(lambda s: None).allow("Start", "Running")
sm.state("Running").on_entry(lambda s: None).allow("Stop", "Idle")

sm.fire("Start")
assert sm.current_state() == "Running"
```

`fire` raises `StateMachineError` when the trigger is not allowed from the
current state or the target state is not configured. If an entry handler
raises, the state's `on_fail` handler is called; without a fallback state the
error propagates.

Logging:

```python
from grimoire.logger import Logger, LoggerConfig, Pagination

with Logger(LoggerConfig(service_name="app", persist=True)) as logger:
    logger.info("started", {"port": 8080})
    worker = logger.new_service_logger(LoggerConfig(service_name="worker", persist=True))
    worker.warn("slow job")
    first_page = logger.messages(Pagination(page=1, amount=10))
```

With `can_output=True`, `logger.output(handler)` blocks and passes each entry to
`handler` until the logger is closed; entries of a service logger also reach
its parent's output. With `persist=True`, closing the logger flushes its cache
to a `DATE__NAME__RUNID__INDEX.log` file in the configured directory (the
current directory by default).

Encoding with compression and encryption:

```python
from grimoire.coder import MultiCoder, decode_json, encode_json

coder = MultiCoder()
blob = coder.encode_encrypt({"user": "someone"}, encode_json)
assert coder.decode_decrypt(blob, decode_json) == {"user": "someone"}
```

Without a key, `MultiCoder` and `Crypto` use a random 32-byte key generated
when `grimoire.crypto` is imported, so data only decodes within the same
process. Pass a 16, 24 or 32-byte key to decode across processes.

Rate limiting a WSGI application:

```python
from grimoire.ratelimit import RateLimiter

limiter = RateLimiter(tries=100, period=1.0)
app = limiter.middleware(app)
```

A locked-out client is answered with 423 until its lockout ends; the lockout
time doubles each time it is applied.

Markdown articles with a front-matter header:

```python
from grimoire.mdservice import MDService

text = """---fm---
author: someone
title: hello
---fm---
# Hello
"""
article = MDService().article(text)
print(article.front_matter.title)   # hello
print(article.html)                 # <h1 id="hello">Hello</h1>
```

Hiding text in an image:

```python
from grimoire import steganography

bits = steganography.encode("hi", "input.png", "output.png")
print(steganography.decode("output.png"))
```

Only pixels in busy regions of the image carry bits, and `decode` returns every
bit found there, so the message comes back followed by whatever those pixels
already held.

## What this package does not do

There is no HTTP or websocket server and no websocket client or session
handling. `ServerConfig` only resolves settings (listen address, TLS paths,
app name, logger), and `Message`/`SimMessage` only describe and validate
payloads; serving them is left to whatever framework you use. The package has
no command-line program.