# gemkit

Build integer programs for graph matching problems and write them out for a
solver. gemkit provides:

- integer program building blocks: variables, linear and quadratic
  expressions, constraints, and linear and quadratic programs;
- graph edit distance formulations: an exact linear formulation, the bipartite
  graph matching approximation, and the edge assignment subproblem used by it;
- solutions and solution lists that render as XML.

gemkit writes the programs; it does not solve them. Save a linear program as
`.lp` or `.mps` and give it to the solver you use.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a program by hand

```python
from gemkit.variable import Variable
from gemkit.expression import LinearExpression
from gemkit.constraint import LinearConstraint, Relation
from gemkit.linear_program import LinearProgram
from gemkit.program import Sense

x = Variable("x_0,0")
y = Variable("x_0,1")

lp = LinearProgram(Sense.MINIMIZE)
lp.set_objective(x * 2.0 + y * 3.0)
lp += LinearConstraint(LinearExpression.sum([x, y]), Relation.EQUAL, 1.0)

print(lp.to_lp())
lp.save("model.mps")   # the format follows the extension: .lp or .mps
```

Variables (`gemkit.variable.Variable`) are binary by default; other types are
`VariableType.BOUNDED` and `VariableType.CONTINUOUS`. Assigning bounds or a
value that does not fit raises `ProgramError`. `deactivate()` sets both bounds
to zero, which removes a variable from play without taking it out of the
model; `activate()` restores its bounds.

`LinearProgram.to_lp()` and `to_mps()` return the text; `render()` uses the
current `output` format (`OutputFormat.LP` or `OutputFormat.MPS`). `save()`
raises `ProgramError` for a file name that ends in neither `.lp` nor `.mps`.

Quadratic programs work the same way with `QuadExpression`, `QuadConstraint`
and `QuadProgram` (in `gemkit.quad_expression`, `gemkit.constraint` and
`gemkit.quad_program`). A `Quad` is the product of two variables, in either
order; `Quad(x, y) * 2.0` gives a `QuadTerm`. `QuadProgram.render()` writes the
LP text format and `save()` writes it to any file name.

## Graph edit distance formulations

`gemkit.ged` holds `LinearGraphEditDistance`, `BipartiteGraphMatching` and
`BipartiteEdges`. Each takes a problem object and builds its linear program
when created; the program is then available as `formulation.program`.

gemkit has no graph classes and no graph file reader of its own. The problem
is any object with:

- `query` and `target` graphs, each with `vertex_count`, `edge_count`,
  `directed`, `vertex(i)` (with `cost`) and `edge(ij)` (with `cost`,
  `origin.index` and `target.index`);
- `cost(element, i, k)`, where `element` is `"vertex"` or `"edge"`, giving the
  substitution cost;
- `is_subgraph`, used when a solution is rendered.

```python
from dataclasses import dataclass

from gemkit.ged import LinearGraphEditDistance


@dataclass
class Vertex:
    index: int
    cost: float = 1.0


@dataclass
class Edge:
    origin: Vertex
    target: Vertex
    cost: float = 1.0


@dataclass
class Graph:
    vertices: list
    edges: list
    directed: bool = True

    @property
    def vertex_count(self):
        return len(self.vertices)

    @property
    def edge_count(self):
        return len(self.edges)

    def vertex(self, i):
        return self.vertices[i]

    def edge(self, ij):
        return self.edges[ij]


@dataclass
class Problem:
    query: Graph
    target: Graph
    is_subgraph: bool = False

    def cost(self, element, i, k):
        return 0.0


a, b = Vertex(0), Vertex(1)
graph = Graph([a, b], [Edge(a, b)])
ged = LinearGraphEditDistance(Problem(graph, graph))
print(ged.program.to_lp())
```

`LinearGraphEditDistance` and `BipartiteGraphMatching` take an upper-bound
parameter `up`. Below 1, it deactivates the most expensive vertex
substitutions of each row and column of the cost matrix before the
constraints are written (and, in the linear formulation, the edge
substitutions that no longer have compatible vertex substitutions).

`BipartiteEdges(problem, i, k)` builds the assignment between the edges around
query vertex `i` and target vertex `k`.

`GedMethod.from_name()` matches method names by prefix, case-insensitively
(`GedMethod.from_name("bip")` gives `GedMethod.BIPARTITE`), and raises
`ValueError` for an unknown name.

## Solutions

Once a solver has returned values, record them in a `gemkit.solution.Solution`
built on the formulation: `add_variable(variable, value)` keeps the non-zero
values and reads vertex substitutions from variables named `x_<i>,<k>` and
edge substitutions from `y_<ij>,<kl>`. Set `status` (a `Status`) and
`objective`; `render_solution()` returns the XML elements for the objective
and, for a valid solution, the substituted, inserted and deleted nodes and
edges.

To enumerate further solutions, exclude the one found with
`formulation.cut(solution, CutMethod.SOLUTION)` (only this solution) or
`CutMethod.MATCHINGS` (none of its matchings) and solve again. For graph edit
distance, `CutMethod.ELEMENTS` raises `ProgramError`; `BipartiteEdges.cut()`
leaves the program unchanged.

`gemkit.solution_list.SolutionList` collects the solutions of one
formulation; `new_solution()` appends one, the list supports `len()` and
iteration, and `render_solutions()` returns them as numbered XML elements.
`CutMethod.from_name()` and `Status.from_name()` match names by prefix,
case-insensitively.

## What gemkit does not do

- It does not solve programs; there is no solver interface.
- It provides no subgraph matching or subgraph isomorphism formulations, only
  the graph edit distance ones above.
- It does not read graphs or problems from files, and it has no command-line
  program.