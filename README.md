# practicekit

A set of small, independent Python modules. None of them imports another,
and none needs a third-party library. Each one handles a single, everyday job.

| Module | What it gives you |
| --- | --- |
| `practicekit.evensum` | `sum_even_integers`, and `sum_even_integers_parallel(numbers, chunk_size=1000)`, which sums chunks on worker threads and raises `ValueError` for a chunk size that is not positive |
| `practicekit.callbacks` | `Item`, `process_collection` (stops at the first item the callback rejects or fails on, raising `ItemProcessingError`), `process_data`, `process_data_twice`, and `CallbackManager`, which runs validation, transformation and logging callbacks on `UserData` and raises a `MultiError` when validations fail |
| `practicekit.featuretoggle` | `FeatureToggle(role, environment, is_premium, subscription)`: feature A for the `admin` role, B in the `staging` environment, C for premium users (`is_premium` or subscription `premium`) |
| `practicekit.emailservice` | `is_valid_email`, and `BasicEmailService`, which checks the address (raising `InvalidEmailError`) and writes a line describing the e-mail to a stream, standard output by default |
| `practicekit.fileversions` | A thread-safe `FileVersionManager` (one shared instance through `get_instance()`), frozen `Version` records numbered from 1, `VersionNotFoundError`, and `VersionLabels` for plain string labels looked up by 1-based position |
| `practicekit.timeouts` | `TimeoutPolicy` (5 s by default, with overrides `TestLongRunning` = 10 s and `TestFast` = 1 s) and `TimeoutManager` / `TimeoutConfig` / `TimeoutNotRegisteredError` for timeouts you register yourself; both run a function and return whether it finished in time |
| `practicekit.fileprocessing` | `read_lines`, `process_files` (logs and skips files that fail, returning their paths), `process_large_file` and `FileProcessingError` |
| `practicekit.paramstore` | `validate_parameter`, a thread-safe `ParameterStore` of `StoredParameters`, and `make_app` for a WSGI application on `/parameters` |
| `practicekit.webhandlers` | `write_message`, `read_message`, `video_settings`, `playback_response`, and `make_app` for a WSGI application on `/write`, `/read`, `/video` and `/playback` |
| `practicekit.documents` | `parse_document`, `Document` / `Section`, `XmlDocumentService` importing XML files into an `InMemoryDocumentRepository`, and `DocumentImportError` |
| `practicekit.users` | `User`, `FileUserRepository` (users saved in memory plus those read from an XML file) and `UserService` |

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## A few examples

```python
from practicekit.evensum import sum_even_integers
from practicekit.emailservice import BasicEmailService, InvalidEmailError, is_valid_email
from practicekit.fileversions import get_instance

sum_even_integers([1, 2, 3, 4, 5])      # 6

is_valid_email("user@example.com")      # True

service = BasicEmailService()
service.send_transactional_email("user@example.com", "Your order has shipped.")
try:
    service.send_promotional_email("invalid-email", "This will not be sent.")
except InvalidEmailError:
    pass

manager = get_instance()
version = manager.add_version("notes.txt", b"first draft", "user123", "Initial version")
manager.get_version("notes.txt", 1)     # the same Version, id 1
manager.list_versions("notes.txt")      # [version]
```

## The parameter store over HTTP

`make_app()` answers on `/parameters`, with the id in the query string:

- `POST /parameters?id=...` stores the form fields (from a
  `application/x-www-form-urlencoded` body and the query string), joining
  repeated values with `", "` and validating `email` and `date`
  (`YYYY-MM-DD`); it replies `201` with a JSON message.
- `GET /parameters?id=...` replies with the stored entry as JSON, or `404`.
- `DELETE /parameters?id=...` replies `204`, or `404` if nothing is stored.

A missing id gives `400`, any other method `405`.

## Commands

Installing the package adds these commands:

- `practicekit-files [PATH ...] [--large]` prints the named files line by line
  (by default `file1.txt`, `file2.txt`, `file3.txt`) and the time taken; with
  `--large` each line is passed through a temporary file instead.
- `practicekit-params [--host HOST] [--port PORT]` serves the parameter store
  (port 8080 by default).
- `practicekit-web [--host HOST] [--port PORT] [--data FILE]` serves the message,
  video-settings and playback handlers, keeping the message in `data.json` by default.
- `practicekit-documents [PATH] [--id ID]` imports an XML document (`document.xml`
  by default) and prints the title and sections of the one with the given id
  (`doc1` by default).
- `practicekit-users [PATH]` adds a sample user through `UserService` and lists
  every user, reading `users.xml` by default.

## What it does not do

- `BasicEmailService` sends no mail; it only writes a line about each e-mail.
- Nothing is stored on disk except the `/write` message: `ParameterStore`,
  `FileVersionManager`, `InMemoryDocumentRepository` and the users saved
  through `FileUserRepository.save` live in memory only, and the XML files are
  only read, never written.
- The timeout helpers report that a function ran too long, but they cannot stop
  it; it keeps running on a background thread.