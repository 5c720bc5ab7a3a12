"""Infrastructure layer — queue file I/O and the Kerberos library adapter."""
