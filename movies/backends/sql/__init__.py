##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Relational database stores for the Movies application, built on SQLAlchemy.

Modules:
    sql_store_base: Defines `SQLAlchemyMoviesStore`, shared by every relational server.
    sql_stores: Contains the PostgreSQL, MySQL, and SQL Server stores and their error classifiers.
"""
