"""oauthx command line interface."""
