"""
Service layer abstraction.

Each service encapsulates the business logic and SQL for one domain.
Services are constructed per request around the application's shared
``Database`` (see ``api.deps``), which keeps them easy to build in
tests.
"""
