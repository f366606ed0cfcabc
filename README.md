# logserver

A small syslog collector. The `logserver` command runs three cooperating
services in one process:

1. **Fetch server** (`logserver.fetch_server.FetchServer`): listens for
   datagrams on UDP and publishes each one, cut to at most 4096 bytes, to a
   NATS subject.
2. **Processing server** (`logserver.processing_server.ProcessingServer`):
   subscribes to that subject, parses each payload as a syslog line
   (`<PRI>Mon DD HH:MM:SS host program message`) and stores it in the SQLite
   database `message.db` in the current directory. Payloads that do not match
   are skipped.
3. **API server** (`logserver.api_server.ApiServer`): serves the stored
   messages over HTTP.

## Installing

```
pip install .
```

## Running

```
logserver
```

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `-a`, `--address` | `0.0.0.0` | Address the UDP and HTTP servers bind to |
| `-f`, `--fetch-port` | `5014` | UDP port for log collection |
| `-p`, `--port` | `8000` | Port of the HTTP API |
| `-n`, `--nats-address` | `demo.nats.io` | NATS server (`host`, `host:port` or `nats://host:port`; port 4222 if omitted) |
| `-s`, `--subject` | `test_subject348573485789345789` | NATS subject for log messages |
| `-V`, `--version` | | Print the version and exit |

The default NATS server is a public demo server. Anything you send through it
can be read by others, so point `--nats-address` at your own server for real
use.

The command exits with status 1 and an `Error:` line on standard error when a
server cannot be started (for example when NATS is unreachable or a port is
taken), and with 130 when interrupted.

Send a test message:

```
echo "<1>Jul 16 19:11:07 host.local app[42]: hello" | nc -u -q 1 localhost 5014
```

To forward everything from rsyslog, add to `rsyslog.conf`:

```
*.* action(type="omfwd" target="127.0.0.1" port="5014" protocol="udp")
```

## HTTP API

| Method | Path | Result |
| --- | --- | --- |
| `GET` | `/messages` | Every stored message as a JSON list, oldest first |
| `GET` | `/count` | The number of stored messages |
| `POST` | `/search` | Messages with the `text/plain` request body in any field; other content types get 415 |
| `GET` | `/docs` | A short JSON description of the paths above |

Each message is an object with the fields `date`, `host`, `program` and
`message`.

## Using it as a library

```python
from logserver.message import Message

msg = Message.from_text("<1>Jul 16 19:11:07 host.local app[42]: hello")
print(msg.to_dict())
```

`Message.from_text` returns `None` when the line does not look like a syslog
message; `Message.from_payload` does the same for UTF-8 bytes.

- `logserver.store.open_store(url)` opens (and creates) the SQLite store
  behind a `sqlite://file.db` URL; the `MessageStore` it returns has
  `insert`, `all`, `count`, `search` and `close`.
- `logserver.api_server.create_app(store)` builds the aiohttp application on
  top of a store.
- `logserver.nats.connect(address)` returns a `NatsClient` with `publish`,
  `subscribe` and `close`; a `Subscription` can be iterated with `async for`.
- `logserver.cli.main(argv)` and `logserver.cli.run(options)` start the
  services from code.

## What it does not do

- The `/docs` path returns only a bare list of paths; there is no interactive
  API explorer and no request or response schemas.
- The NATS client is minimal: no TLS, no authentication, no reconnection.
  When the connection drops, the processing server stops.
- Syslog lines are only parsed in the `<PRI>Mon DD HH:MM:SS host program
  message` form; there is no support for other syslog formats or for TCP
  transport.