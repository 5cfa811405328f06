# Rule script: collect the integer literals each expression may evaluate to.
#
#   funflow solve examples/factorial.fun -r cfa -r examples/constants.py

for node in type("n"):
    define(Rule(Constant(node.value), ExpressionReference(node)))

for node in type("var"):
    define(Rule(VariableReference(node), ExpressionReference(node)))

for node in type("let"):
    define(Rule(ExpressionReference(node.value), BoundVariableReference(node)))
    define(Rule(ExpressionReference(node.body), ExpressionReference(node)))

for node in type("if"):
    define(Rule(ExpressionReference(node.thenBody), ExpressionReference(node)))
    define(Rule(ExpressionReference(node.elseBody), ExpressionReference(node)))
