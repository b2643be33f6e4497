# /ingestion/seeds.py

# Built-in demo universe. Each domain lists its nodes as
# (id, labels, properties), its edges as (source, target, type, confidence)
# and the exemplar phrases the intent router compares queries against.
# Edges whose endpoint lives in another domain are bridging edges.

SCIENCE = {
    "nodes": [
        ("qm", ["Concept"], {"name": "Quantum Mechanics", "field": "physics", "importance": 10,
                             "description": "Physics of atoms and subatomic particles, energy levels and wave functions."}),
        ("thermo", ["Concept"], {"name": "Thermodynamics", "field": "physics", "importance": 9,
                                 "description": "Heat, energy, entropy and the laws governing physical and chemical change."}),
        ("evolution", ["Concept"], {"name": "Evolution", "field": "biology", "importance": 10,
                                    "description": "Natural selection and the change of species over generations."}),
        ("molbio", ["Concept"], {"name": "Molecular Biology", "field": "biology", "importance": 9,
                                 "description": "DNA, RNA and proteins, the molecules that carry and express genetic information."}),
        ("orgchem", ["Concept"], {"name": "Organic Chemistry", "field": "chemistry", "importance": 9,
                                  "description": "Carbon compounds and how atoms bond together into molecules."}),
        ("biochem", ["Concept"], {"name": "Biochemistry", "field": "chemistry", "importance": 9,
                                  "description": "Chemical reactions and molecules inside living cells."}),
        ("genetics", ["Concept"], {"name": "Genetics", "field": "biology", "importance": 10,
                                   "description": "Genes, heredity and variation in living organisms."}),
        ("em", ["Concept"], {"name": "Electromagnetism", "field": "physics", "importance": 9,
                             "description": "Electric and magnetic fields, light and the forces between charged particles."}),
        ("einstein", ["Scientist"], {"name": "Einstein", "era": "20th century", "contributions": "relativity",
                                     "description": "Physicist behind relativity and the photon theory of light."}),
        ("darwin", ["Scientist"], {"name": "Darwin", "era": "19th century", "contributions": "evolution",
                                   "description": "Naturalist who proposed evolution by natural selection."}),
        ("curie", ["Scientist"], {"name": "Curie", "era": "20th century", "contributions": "radioactivity",
                                  "description": "Physicist and chemist who pioneered research on radioactivity."}),
        ("feynman", ["Scientist"], {"name": "Feynman", "era": "20th century", "contributions": "quantum electrodynamics",
                                    "description": "Physicist who developed quantum electrodynamics."}),
        ("crick", ["Scientist"], {"name": "Crick", "era": "20th century", "contributions": "DNA structure",
                                  "description": "Biologist who co-discovered the double helix structure of DNA."}),
    ],
    "edges": [
        ("einstein", "qm", "PIONEERED", 1.0),
        ("darwin", "evolution", "PIONEERED", 1.0),
        ("curie", "orgchem", "CONTRIBUTED_TO", 1.0),
        ("feynman", "qm", "PIONEERED", 1.0),
        ("crick", "molbio", "PIONEERED", 1.0),
        ("qm", "molbio", "INFLUENCES", 0.95),
        ("evolution", "genetics", "CONNECTS_TO", 0.95),
        ("molbio", "biochem", "CONNECTS_TO", 0.95),
        ("orgchem", "biochem", "ENABLES", 0.95),
        ("thermo", "biochem", "UNDERLIES", 0.95),
        ("einstein", "kant", "READ", 0.7),
    ],
    "exemplars": [
        "How do atoms bond together into molecules?",
        "What is quantum mechanics and how do particles behave?",
        "Explain natural selection and the evolution of species",
        "How does DNA carry genetic information?",
        "What are the laws of thermodynamics and entropy?",
        "How do chemical reactions work in living cells?",
        "What causes electric and magnetic fields?",
    ],
}

TECHNOLOGY = {
    "nodes": [
        ("machine_learning", ["Technology"], {"name": "Machine Learning", "domain": "AI", "maturity": "mature",
                                              "description": "Algorithms that learn patterns from training data."}),
        ("deep_learning", ["Technology"], {"name": "Deep Learning", "domain": "AI", "maturity": "mature",
                                           "description": "Neural networks with many layers trained on large datasets."}),
        ("transformers", ["Technology"], {"name": "Transformers", "domain": "AI", "maturity": "cutting-edge",
                                          "description": "Attention based neural network architecture behind language models."}),
        ("vector_databases", ["Technology"], {"name": "Vector Databases", "domain": "Infrastructure", "maturity": "emerging",
                                              "description": "Databases that index embeddings for similarity search."}),
        ("kubernetes", ["Technology"], {"name": "Kubernetes", "domain": "DevOps", "maturity": "mature",
                                        "description": "Container orchestration platform for deploying software services."}),
        ("graphql", ["Technology"], {"name": "GraphQL", "domain": "APIs", "maturity": "mature",
                                     "description": "Query language and runtime for web APIs."}),
        ("webassembly", ["Technology"], {"name": "WebAssembly", "domain": "Web", "maturity": "emerging",
                                         "description": "Portable binary format that runs compiled code in the browser."}),
        ("rust", ["Technology"], {"name": "Rust", "domain": "Languages", "maturity": "mature",
                                  "description": "Systems programming language focused on memory safety."}),
        ("openai", ["Organization"], {"name": "OpenAI", "focus": "AGI research",
                                      "description": "AI research company building large language models."}),
        ("google", ["Organization"], {"name": "Google", "focus": "search and AI",
                                      "description": "Technology company focused on search, cloud and AI."}),
        ("anthropic", ["Organization"], {"name": "Anthropic", "focus": "AI safety",
                                         "description": "AI safety company building reliable AI systems."}),
        ("meta", ["Organization"], {"name": "Meta", "focus": "social and AI",
                                    "description": "Social media company with open AI research."}),
        ("cncf", ["Organization"], {"name": "CNCF", "focus": "cloud native",
                                    "description": "Foundation that hosts cloud native software projects."}),
    ],
    "edges": [
        ("deep_learning", "transformers", "ENABLES", 1.0),
        ("machine_learning", "deep_learning", "PARENT_OF", 1.0),
        ("transformers", "vector_databases", "POWERS", 1.0),
        ("rust", "webassembly", "IMPLEMENTS", 1.0),
        ("kubernetes", "vector_databases", "ORCHESTRATES", 1.0),
        ("graphql", "vector_databases", "QUERIES", 1.0),
        ("openai", "transformers", "PIONEERED", 1.0),
        ("google", "transformers", "INVENTED", 1.0),
        ("anthropic", "machine_learning", "ADVANCES", 1.0),
        ("cncf", "kubernetes", "MAINTAINS", 1.0),
        ("machine_learning", "empiricism", "DRAWS_ON", 0.6),
    ],
    "exemplars": [
        "How do neural networks learn from training data?",
        "What is a vector database used for?",
        "How do I deploy containers with Kubernetes?",
        "Which programming language compiles to WebAssembly?",
        "What are transformer models in machine learning?",
        "How do software APIs and web services work?",
        "Which companies build artificial intelligence systems?",
    ],
}

PHILOSOPHY = {
    "nodes": [
        ("utilitarianism", ["PhilosophyConcept"], {"name": "Utilitarianism", "branch": "ethics", "era": "modern",
                                                   "description": "Ethics judging actions by the happiness they produce."}),
        ("deontology", ["PhilosophyConcept"], {"name": "Deontology", "branch": "ethics", "era": "enlightenment",
                                               "description": "Ethics of duty and moral rules regardless of consequences."}),
        ("existentialism", ["PhilosophyConcept"], {"name": "Existentialism", "branch": "metaphysics", "era": "20th century",
                                                   "description": "Freedom, choice and the meaning of human existence."}),
        ("empiricism", ["PhilosophyConcept"], {"name": "Empiricism", "branch": "epistemology", "era": "enlightenment",
                                               "description": "Knowledge comes from sensory experience and observation."}),
        ("rationalism", ["PhilosophyConcept"], {"name": "Rationalism", "branch": "epistemology", "era": "enlightenment",
                                                "description": "Knowledge comes from reason independent of the senses."}),
        ("phenomenology", ["PhilosophyConcept"], {"name": "Phenomenology", "branch": "metaphysics", "era": "20th century",
                                                  "description": "Study of the structures of consciousness and experience."}),
        ("pragmatism", ["PhilosophyConcept"], {"name": "Pragmatism", "branch": "epistemology", "era": "modern",
                                               "description": "Truth and meaning judged by practical consequences."}),
        ("virtue_ethics", ["PhilosophyConcept"], {"name": "Virtue Ethics", "branch": "ethics", "era": "ancient",
                                                  "description": "Ethics centred on moral character and the virtues."}),
        ("kant", ["Philosopher"], {"name": "Kant", "era": "enlightenment", "nationality": "German",
                                   "description": "Philosopher of duty, reason and the categorical imperative."}),
        ("nietzsche", ["Philosopher"], {"name": "Nietzsche", "era": "19th century", "nationality": "German",
                                        "description": "Philosopher of the will to power and the revaluation of values."}),
        ("sartre", ["Philosopher"], {"name": "Sartre", "era": "20th century", "nationality": "French",
                                     "description": "Existentialist philosopher of radical freedom."}),
        ("hume", ["Philosopher"], {"name": "Hume", "era": "enlightenment", "nationality": "Scottish",
                                   "description": "Empiricist philosopher sceptical of causation and induction."}),
        ("mill", ["Philosopher"], {"name": "Mill", "era": "19th century", "nationality": "British",
                                   "description": "Philosopher of liberty and utilitarian ethics."}),
        ("aristotle", ["Philosopher"], {"name": "Aristotle", "era": "ancient", "nationality": "Greek",
                                        "description": "Ancient philosopher of logic, ethics and the virtues."}),
        ("husserl", ["Philosopher"], {"name": "Husserl", "era": "20th century", "nationality": "German",
                                      "description": "Founder of phenomenology and the study of consciousness."}),
    ],
    "edges": [
        ("kant", "deontology", "FOUNDED", 0.95),
        ("sartre", "existentialism", "DEVELOPED", 0.95),
        ("hume", "empiricism", "CHAMPIONED", 0.95),
        ("mill", "utilitarianism", "REFINED", 0.95),
        ("aristotle", "virtue_ethics", "ORIGINATED", 0.95),
        ("husserl", "phenomenology", "CREATED", 0.95),
        ("nietzsche", "existentialism", "INFLUENCED", 0.95),
        ("deontology", "utilitarianism", "OPPOSES", 0.95),
        ("empiricism", "rationalism", "DEBATES", 0.95),
        ("existentialism", "phenomenology", "BUILDS_ON", 0.95),
        ("pragmatism", "empiricism", "SYNTHESIZES", 0.95),
    ],
    "exemplars": [
        "What is the meaning of life and human existence?",
        "Is it moral to lie to protect someone?",
        "What can we know through reason versus experience?",
        "What did Kant say about duty and ethics?",
        "What makes a person virtuous?",
        "Do we have free will?",
        "What is consciousness according to phenomenology?",
    ],
}

BUILTIN_SEEDS = {
    "science": SCIENCE,
    "technology": TECHNOLOGY,
    "philosophy": PHILOSOPHY,
}
