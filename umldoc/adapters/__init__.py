"""Front-ends that introspect source code into a DeclarationGraph."""
