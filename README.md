# swole

Cookie-backed A/B testing for Python web applications.

You register experiments on an `ExperimentManager`. Each experiment has two or
more weighted alternatives. When a visitor starts an experiment, the manager
picks an alternative at random according to the weights. It stores the choice
as JSON in a cookie named `swole`, so the visitor keeps the same alternative on
later visits. When the visitor finishes the experiment, the same cookie records
that, and it is recorded only once.

## Installation

```
pip install .
```

No third-party packages are needed.

## Usage

```python
from swole.experiment import Alternative, Experiment
from swole.manager import ExperimentManager

manager = ExperimentManager()
manager.register_experiment(
    Experiment(
        key="test_experiment",
        alternatives=[Alternative(name="control"), Alternative(name="variant", weight=3)],
    )
)

# In a request handler, pass the request's Cookie header (or None) and a list.
# When the cookie has to be set or refreshed, a ("Set-Cookie", value) tuple is
# appended to that list.
headers = []
start = manager.start_experiment("test_experiment", headers, cookie_header)
print(start.alternative, start.did_start_first_time)

finish = manager.finish_experiment("test_experiment", headers, cookie_header)
print(finish.did_finish, finish.did_finish_first_time)
```

`ExperimentManager` takes an optional `rng` argument, such as a
`random.Random` instance, which makes the choice of alternative reproducible.

The cookie is written with `Path=/`, `Max-Age` of one day, `HttpOnly`,
`Secure` and `SameSite=Lax`. Its value is URL-encoded.

### Rules for experiments

`register_experiment` raises `swole.errors.InvalidExperimentError` (a
`ValueError`) in any of these cases:

- the key is empty
- the key is already registered
- the experiment has fewer than two alternatives
- two alternatives have the same name

An alternative with a weight of `0`, which is the default, gets a weight of `1`.

`get_experiment`, `start_experiment` and `finish_experiment` raise
`swole.errors.ExperimentNotFoundError` (a `LookupError`) for a key that was
never registered.

### Results

`start_experiment` returns a `StartExperimentResponse` with these fields:

- `did_start`
- `did_start_first_time`
- `alternative`

If the cookie already holds the experiment, the stored alternative is returned,
`did_start_first_time` is false, and the cookie is sent again to refresh it.

`finish_experiment` returns a `FinishExperimentResponse` with these fields:

- `did_finish`
- `did_finish_first_time`
- `alternative`

A visitor who never started the experiment cannot finish it. In that case the
response reports the first alternative, `did_finish` is false, and no cookie is
written. Finishing a second time reports `did_finish_first_time` as false.

### Errors from the cookie

- A cookie value that is not a JSON object of strings, or that has a bad `%`
  escape, raises `ValueError`.
- If the Set-Cookie header would be longer than 4096 bytes,
  `swole.cookies.CookieValueTooLongError` (a `ValueError`) is raised.

The helpers in `swole.cookies` can also be used on their own:

- `Cookie` and `Cookie.header_value()`
- `write_cookie(headers, cookie)`
- `read_cookie(cookie_header, name)`
- `unique(values)`

## Demo server

```
swole-demo [--host HOST] [--port PORT]
```

This starts a WSGI server on port 3000 by default. It has one experiment,
`test_experiment`, with the alternatives `control` and `variant`.
`GET /finish` finishes the experiment, and a GET to any other path starts it.
Each response is a line of plain text showing the result. `HEAD` requests are
also accepted. Other methods get `405 Method Not Allowed`.

`swole.server.make_app(manager, key)` builds the same application for any
manager and experiment key.

## What it does not do

All state lives in the visitor's cookie. The package keeps no server-side
record of assignments or conversions, and it does not count or report
experiment results. Registered experiments are held in memory for the life of
the `ExperimentManager`.