"""Built-in aggregation file templates."""

TYPESCRIPT_INDEX = """\
//
// Do not edit. This file was generated via the "protoplan" command line tool.
//
//     protoplan generate typescript
//
{% for entry in entries %}

// -------------------------------------------------------------------------- //

import * as {{ entry.name }}Client from "./{{ entry.dir }}/ApiServiceClientPb";
import * as {{ entry.name }}Create from "./{{ entry.dir }}/create_pb";
import * as {{ entry.name }}Delete from "./{{ entry.dir }}/delete_pb";
import * as {{ entry.name }}Search from "./{{ entry.dir }}/search_pb";
import * as {{ entry.name }}Update from "./{{ entry.dir }}/update_pb";

export const {{ entry.name }} = {
  Client: {{ entry.name }}Client.APIClient,
  Create: {
    I: {{ entry.name }}Create.CreateI,
    O: {{ entry.name }}Create.CreateO,
  },
  Delete: {
    I: {{ entry.name }}Delete.DeleteI,
    O: {{ entry.name }}Delete.DeleteO,
  },
  Search: {
    I: {{ entry.name }}Search.SearchI,
    O: {{ entry.name }}Search.SearchO,
  },
  Update: {
    I: {{ entry.name }}Update.UpdateI,
    O: {{ entry.name }}Update.UpdateO,
  },
};
{% endfor %}
"""
