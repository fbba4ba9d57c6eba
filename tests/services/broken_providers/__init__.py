"""Package whose submodule fails to import — discovery must fail loudly."""
