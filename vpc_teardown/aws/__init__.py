"""AWS client, credential and provider gateway helpers."""
