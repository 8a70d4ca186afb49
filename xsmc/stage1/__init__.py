"""Arithmetic expression trees and their code generation."""