"""Built-in plugins shipped with krb5sync."""
