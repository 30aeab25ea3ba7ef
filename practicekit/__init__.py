"""Small, self-contained modules: even sums, callbacks, feature toggles, e-mail
checks, file versions, timeouts, file processing, a parameter store, WSGI
handlers and XML-backed document and user repositories."""

__version__ = "0.1.0"

__all__ = [
    "callbacks",
    "documents",
    "emailservice",
    "evensum",
    "featuretoggle",
    "fileprocessing",
    "fileversions",
    "paramstore",
    "timeouts",
    "users",
    "webhandlers",
]