"""krb5sync — push Kerberos principal changes to Active Directory."""

__version__ = "1.0.0"
