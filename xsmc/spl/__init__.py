"""SPL syntax trees, registers, labels, symbols and code generation."""