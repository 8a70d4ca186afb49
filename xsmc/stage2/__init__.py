"""Statements with variables, read and write, and their code generation."""