"""Control flow: conditionals, loops, code generation and label resolution."""