"""staffdesk package.

Employee directory API organised by feature modules (users, departments,
employees, files) with a thin Flask controller layer over service and
repository layers.
"""

__version__ = "0.1.0"
